"""
Configuration settings for the node RPC client
"""
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from noderpc.adapters.adapter_factory import TransportType
from noderpc.node_pool import Node

ENV_PREFIX = "NODERPC_"


def _env_list(name: str) -> List[str]:
    raw = os.getenv(ENV_PREFIX + name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX + name} must be an integer, got {raw!r}")


def _env_headers(name: str) -> Optional[Dict[str, str]]:
    headers = {}
    for item in _env_list(name):
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"{ENV_PREFIX + name} entries must look like Name=value, got {item!r}")
        headers[key.strip()] = value.strip()
    return headers or None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class NodeConfig:
    """Configuration for one node"""
    url: str
    current_dialect: bool = True

    def build(self) -> Node:
        return Node(self.url, current_dialect=self.current_dialect)


@dataclass
class ClientConfig:
    """Main configuration for the node RPC client"""
    nodes: List[NodeConfig] = field(default_factory=list)
    max_tries: int = 3
    timeout_ms: int = 5000
    transport: str = TransportType.HTTP
    headers: Optional[Dict[str, str]] = None

    # Tracing configuration
    enable_tracing: bool = False
    service_name: str = "noderpc.client"
    otlp_endpoint: str = "localhost:4317"

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check value ranges

        Raises:
            ValueError: Invalid setting
        """
        if self.max_tries < 1:
            raise ValueError(f"max_tries must be at least 1, got {self.max_tries}")
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {self.timeout_ms}")

    @classmethod
    def from_urls(cls, urls: List[str], **kwargs) -> "ClientConfig":
        """Create config for nodes assumed to speak the current dialect"""
        return cls(nodes=[NodeConfig(url) for url in urls], **kwargs)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create config from environment variables

        Raises:
            ValueError: NODERPC_NODES missing or a value is invalid
        """
        urls = _env_list("NODES")
        if not urls:
            raise ValueError(f"{ENV_PREFIX}NODES must list at least one node URL")
        legacy = set(_env_list("LEGACY_NODES"))

        return cls(
            nodes=[NodeConfig(url, current_dialect=url not in legacy) for url in urls],
            max_tries=_env_int("MAX_TRIES", 3),
            timeout_ms=_env_int("TIMEOUT_MS", 5000),
            transport=os.getenv(ENV_PREFIX + "TRANSPORT", TransportType.HTTP),
            headers=_env_headers("HEADERS"),
            enable_tracing=_env_bool("ENABLE_TRACING", False),
            service_name=os.getenv(ENV_PREFIX + "SERVICE_NAME", "noderpc.client"),
            otlp_endpoint=os.getenv(ENV_PREFIX + "OTLP_ENDPOINT", "localhost:4317"),
        )

    def build_nodes(self) -> List[Node]:
        """Create fresh Node objects for a client"""
        return [node.build() for node in self.nodes]

    def transport_config(self) -> Dict[str, Any]:
        return {"timeout_ms": self.timeout_ms, "headers": self.headers}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "nodes": [{"url": n.url, "current_dialect": n.current_dialect} for n in self.nodes],
            "max_tries": self.max_tries,
            "timeout_ms": self.timeout_ms,
            "transport": self.transport,
            "headers": dict(self.headers) if self.headers else None,
            "enable_tracing": self.enable_tracing,
            "service_name": self.service_name,
        }
