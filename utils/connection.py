"""
Elasticsearch connection management.
"""

import logging
import sys
from typing import Optional

from elasticsearch import Elasticsearch

from config.environments import ESConfig, get_elasticsearch_config


logger = logging.getLogger(__name__)


def new_es_client(config: Optional[ESConfig] = None) -> Elasticsearch:
    """
    Create an Elasticsearch client.

    Args:
        config: Connection settings (read from the environment if not given)

    Returns:
        Configured Elasticsearch client
    """
    if config is None:
        config = get_elasticsearch_config()

    # Build connection parameters
    params = {
        "hosts": list(config.addrs),
        "request_timeout": config.request_timeout,
        "verify_certs": config.verify_certs,
    }

    if config.ca_certs:
        params["ca_certs"] = config.ca_certs

    # Add authentication
    if config.api_key:
        params["api_key"] = config.api_key
    elif config.username and config.password:
        params["basic_auth"] = (config.username, config.password)

    logger.info("creating elasticsearch client for %s", ", ".join(config.addrs))
    return Elasticsearch(**params)


def must_new_es_client(config: Optional[ESConfig] = None) -> Elasticsearch:
    """
    Create an Elasticsearch client or terminate the process.

    Meant for application startup, where running without a client is pointless.
    """
    try:
        return new_es_client(config)
    except Exception as e:
        logger.critical("fail to create elasticsearch client: %s", e)
        sys.exit(1)


def test_connection(client: Optional[Elasticsearch] = None) -> bool:
    """
    Test Elasticsearch connection using a low-privilege operation.

    Args:
        client: Client to probe (a new one is created if not given)

    Returns:
        True if connection successful
    """
    try:
        es = client or new_es_client()

        # ping() requires cluster:monitor, an empty search does not
        response = es.search(index="*", size=0, query={"match_all": {}}, timeout="5s")
        return "hits" in response

    except Exception:
        logger.debug("search probe failed, trying count", exc_info=True)
        try:
            es = client or new_es_client()
            response = es.count(index="*")
            return "count" in response
        except Exception:
            logger.debug("count probe failed", exc_info=True)
            return False
