"""
Transport factory

Creates transport adapter instances from configuration.
"""

from typing import Any, Dict

from noderpc.adapters.adapter_interface import TransportInterface
from noderpc.adapters.http.client import HttpTransport


class TransportType:
    """Transport type constants"""
    HTTP = "http"


class TransportFactory:
    """Transport factory, used to create transport adapter instances"""

    @staticmethod
    def create_transport(transport_type: str, config: Dict[str, Any] = None) -> TransportInterface:
        """Create transport adapter

        Args:
            transport_type: Transport type, such as "http"
            config: Transport configuration parameters

        Returns:
            TransportInterface: Transport adapter instance

        Raises:
            ValueError: Invalid transport type
        """
        if config is None:
            config = {}

        if transport_type.lower() == TransportType.HTTP:
            return HttpTransport(
                timeout_ms=config.get("timeout_ms", 5000),
                headers=config.get("headers"),
            )
        raise ValueError(f"Invalid transport type: {transport_type}")
