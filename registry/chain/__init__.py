"""
Node access for the registry contract.

This module provides:
- SIMPLE_RECIPIENT_REGISTRY_ABI: Event and function fragments
- Web3EventSource: EventSource over AsyncWeb3 log queries
- add_recipient: Registration submission pass-through
"""

from .abi import SIMPLE_RECIPIENT_REGISTRY_ABI
from .web3_source import Web3EventSource, connect
from .submit import SIMPLE_REGISTRY, RegistryDescriptor, add_recipient

__all__ = [
    "SIMPLE_RECIPIENT_REGISTRY_ABI",
    "Web3EventSource",
    "connect",
    "add_recipient",
    "RegistryDescriptor",
    "SIMPLE_REGISTRY",
]
