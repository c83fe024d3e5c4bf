"""
Runtime settings read from the environment.

Environment Variables:
    REGISTRY_RPC_URL: JSON-RPC endpoint of the node - default: http://127.0.0.1:8545
    REGISTRY_IPFS_GATEWAY: Gateway used to build project image URLs - default: https://ipfs.io
    REGISTRY_STORE_PATH: Recipient store document - default: /tmp/registry/recipients.json
    REGISTRY_EVENT_LOG_PATH: Local event log - default: /tmp/registry/events.log
"""

import os
from dataclasses import dataclass

DEFAULT_RPC_URL = "http://127.0.0.1:8545"
DEFAULT_IPFS_GATEWAY = "https://ipfs.io"
DEFAULT_STORE_PATH = "/tmp/registry/recipients.json"
DEFAULT_EVENT_LOG_PATH = "/tmp/registry/events.log"


@dataclass(frozen=True)
class Settings:
    rpc_url: str = DEFAULT_RPC_URL
    ipfs_gateway_url: str = DEFAULT_IPFS_GATEWAY
    store_path: str = DEFAULT_STORE_PATH
    event_log_path: str = DEFAULT_EVENT_LOG_PATH

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            rpc_url=os.getenv("REGISTRY_RPC_URL") or DEFAULT_RPC_URL,
            ipfs_gateway_url=os.getenv("REGISTRY_IPFS_GATEWAY") or DEFAULT_IPFS_GATEWAY,
            store_path=os.getenv("REGISTRY_STORE_PATH") or DEFAULT_STORE_PATH,
            event_log_path=os.getenv("REGISTRY_EVENT_LOG_PATH") or DEFAULT_EVENT_LOG_PATH,
        )
