#!/usr/bin/env python3
"""
Debug script for exercising ESOper against a live cluster.

Uses a throwaway index, removed at the end. Reads ELASTIC_* variables.

Usage:
    python debug/check_es_oper.py [--verbose]
"""
import logging
import sys
import os
import uuid

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from es_types import GetResponse, ResponseStatusError, SearchResponse
from oper import ESOper, TemplateParam
from utils.connection import must_new_es_client, test_connection
from utils.template import TextTemplate
from debug.utils.helpers import (
    print_header, print_test, print_success, print_error, print_info, print_json,
    safe_call, exit_with_summary
)


QUERIES = TextTemplate(
    '{"query": {"match_all": {}}}',
    templates={"by_brand": '{"query": {"term": {"brand.keyword": {{ brand | tojson }}}}}'},
)


class ESOperChecker:
    def __init__(self, es_oper: ESOper):
        self.es_oper = es_oper
        self.index = f"es-oper-debug-{uuid.uuid4().hex[:8]}"
        self.passed = 0
        self.failed = 0

    def _record(self, ok: bool, message: str) -> bool:
        if ok:
            print_success(message)
            self.passed += 1
        else:
            print_error(message)
            self.failed += 1
        return ok

    def check_connectivity(self) -> bool:
        print_test("Elasticsearch Basic Connectivity")
        success, result = safe_call(test_connection, self.es_oper.es_client)
        return self._record(success and result is True, "connection probe")

    def check_writes(self) -> bool:
        print_test("Index / Create / Bulk")

        def write_body(buf):
            for i, brand in enumerate(["acme", "acme", "globex"], start=3):
                buf.write(f'{{"index": {{"_id": "{i}"}}}}\n')
                buf.write(f'{{"name": "item-{i}", "brand": "{brand}"}}\n')

        steps = [
            (self.es_oper.index, (self.index, "1", {"name": "kettle", "brand": "acme"})),
            (self.es_oper.create, (self.index, "2", {"name": "toaster", "brand": "globex"})),
            (self.es_oper.bulk, (self.index, write_body)),
        ]
        ok = True
        for func, args in steps:
            success, result = safe_call(func, *args, refresh=True)
            ok = self._record(success, f"{func.__name__}" + ("" if success else f": {result}")) and ok
        return ok

    def check_reads(self) -> bool:
        print_test("Get / Count / Search")

        success, doc = safe_call(self.es_oper.get, GetResponse, self.index, "1")
        self._record(success and doc.found, "get document 1")

        t = TemplateParam(template=QUERIES, data={"brand": "acme"}, name="by_brand")
        success, count = safe_call(self.es_oper.count_template, t, [self.index])
        self._record(success and count == 3, f"count_template by brand -> {count}")

        success, result = safe_call(self.es_oper.search_template, SearchResponse, t, [self.index])
        if self._record(success, "search_template by brand"):
            print_info(f"Query took: {result.took}ms, total: {result.total}")
            print_json(result.sources, "Sources")
            return True
        return False

    def check_missing_document(self) -> bool:
        print_test("Missing Document Error")
        try:
            self.es_oper.get(None, self.index, "does-not-exist")
        except ResponseStatusError as e:
            print_info(str(e))
            return self._record(e.status == 404, "404 surfaced as ResponseStatusError")
        return self._record(False, "expected a ResponseStatusError")

    def check_by_query(self) -> bool:
        print_test("Update / Delete By Query")
        script = '{"script": {"source": "ctx._source.checked = true"}, "query": {"match_all": {}}}'
        success, result = safe_call(self.es_oper.update_by_query, script, [self.index], refresh=True)
        self._record(success, "update_by_query" + ("" if success else f": {result}"))

        t = TemplateParam(template=QUERIES, data={"brand": "globex"}, name="by_brand")
        success, result = safe_call(self.es_oper.delete_by_query_template, t, [self.index], refresh=True)
        self._record(success, "delete_by_query_template" + ("" if success else f": {result}"))

        success, count = safe_call(self.es_oper.count_template, TemplateParam(template=QUERIES), [self.index])
        return self._record(success and count == 3, f"documents left -> {count}")

    def cleanup(self) -> None:
        self.es_oper.es_client.options(ignore_status=404).indices.delete(index=self.index)

    def run_all(self) -> None:
        print_header("ESOPER FUNCTIONALITY CHECKS")
        print_info(f"Using index {self.index}")

        if not self.check_connectivity():
            exit_with_summary(self.passed, self.failed)

        try:
            self.check_writes()
            self.check_reads()
            self.check_missing_document()
            self.check_by_query()
        finally:
            self.cleanup()

        exit_with_summary(self.passed, self.failed)


def main():
    if "--verbose" in sys.argv:
        logging.basicConfig(level=logging.DEBUG)
    ESOperChecker(ESOper(must_new_es_client())).run_all()


if __name__ == "__main__":
    main()
