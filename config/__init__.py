"""
Configuration management for the Elasticsearch adapter.
"""

from .environments import ESConfig, get_elasticsearch_config

__all__ = [
    "ESConfig",
    "get_elasticsearch_config",
]
