"""
Elasticsearch connection configuration.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv


# Pick up a local .env before reading the environment
load_dotenv()


DEFAULT_URL = "http://localhost:9200"
DEFAULT_TIMEOUT_MS = 30000


def _getenv(*names: str, default: Optional[str] = None) -> Optional[str]:
    """Return the first environment variable that is set."""
    for name in names:
        value = os.getenv(name)
        if value is not None:
            return value
    return default


def _split_addrs(value: str) -> List[str]:
    return [addr.strip() for addr in value.split(",") if addr.strip()]


@dataclass
class ESConfig:
    """Cluster addresses and credentials used to build the client."""
    addrs: List[str] = field(default_factory=lambda: [DEFAULT_URL])
    username: Optional[str] = None
    password: Optional[str] = None
    api_key: Optional[str] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    verify_certs: bool = True
    ca_certs: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ESConfig":
        """
        Create from a mapping such as a parsed YAML section.

        Accepts ``addrs`` either as a list or a comma-separated string.

        Args:
            data: Configuration mapping

        Returns:
            ESConfig instance
        """
        addrs = data.get("addrs") or [DEFAULT_URL]
        if isinstance(addrs, str):
            addrs = _split_addrs(addrs)

        return cls(
            addrs=list(addrs),
            username=data.get("username"),
            password=data.get("password"),
            api_key=data.get("api_key"),
            timeout_ms=int(data.get("timeout_ms", DEFAULT_TIMEOUT_MS)),
            verify_certs=bool(data.get("verify_certs", True)),
            ca_certs=data.get("ca_certs"),
        )

    @property
    def request_timeout(self) -> float:
        """Request timeout in seconds."""
        return self.timeout_ms / 1000.0


def get_elasticsearch_config() -> ESConfig:
    """
    Build the Elasticsearch configuration from environment variables.

    Reads ELASTIC_* variables, falling back to ELASTICSEARCH_* ones.

    Returns:
        ESConfig for the current environment
    """
    url = _getenv("ELASTIC_URL", "ELASTICSEARCH_URL", default=DEFAULT_URL)
    verify = _getenv("ELASTIC_VERIFY_CERTS", default="true")

    return ESConfig(
        addrs=_split_addrs(url) or [DEFAULT_URL],
        username=_getenv("ELASTIC_USERNAME", "ELASTICSEARCH_USERNAME"),
        password=_getenv("ELASTIC_PASSWORD", "ELASTICSEARCH_PASSWORD"),
        api_key=_getenv("ELASTIC_API_KEY", "ELASTICSEARCH_API_KEY"),
        timeout_ms=int(_getenv("ELASTIC_TIMEOUT", "ELASTICSEARCH_TIMEOUT", default=str(DEFAULT_TIMEOUT_MS))),
        verify_certs=verify.strip().lower() not in ("0", "false", "no"),
        ca_certs=_getenv("ELASTIC_CA_CERTS"),
    )
