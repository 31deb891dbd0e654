#!/usr/bin/env python
"""
Failover Client Example

Reads node URLs from the NODERPC_* environment variables (or the command line)
and fetches recent market trades, falling back to other nodes and to the legacy
dialect as needed.

    NODERPC_NODES=https://api.example.net,https://legacy.example.net \
        python examples/failover_client_example.py
"""

import logging
import sys

from noderpc import CallDescription, ClientConfig, NodeRpcClient, RpcClientError


def setup_logging():
    """Setup logging configuration"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main():
    setup_logging()

    if len(sys.argv) > 1:
        config = ClientConfig.from_urls(sys.argv[1:])
    else:
        config = ClientConfig.from_env()

    call = CallDescription.of(
        "market_history_api", "get_recent_trades",
        params={"limit": 5},
        legacy_params=[5],
    )

    with NodeRpcClient.from_config(config) as client:
        try:
            result = client.call(call)
        except RpcClientError as e:
            print(f"❌ Call failed on node {e.node}: {e}")
            return 1

    print(f"✅ {call}: {result}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
