"""
SimpleRecipientRegistry contract ABI (the fragments this package uses).
"""

SIMPLE_RECIPIENT_REGISTRY_ABI = [
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "bytes32", "name": "_recipientId", "type": "bytes32"},
            {"indexed": False, "internalType": "address", "name": "_recipient", "type": "address"},
            {"indexed": False, "internalType": "string", "name": "_metadata", "type": "string"},
            {"indexed": False, "internalType": "uint256", "name": "_index", "type": "uint256"},
            {"indexed": False, "internalType": "uint256", "name": "_timestamp", "type": "uint256"},
        ],
        "name": "RecipientAdded",
        "type": "event",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "bytes32", "name": "_recipientId", "type": "bytes32"},
            {"indexed": False, "internalType": "uint256", "name": "_timestamp", "type": "uint256"},
        ],
        "name": "RecipientRemoved",
        "type": "event",
    },
    {
        "inputs": [
            {"internalType": "address", "name": "_recipient", "type": "address"},
            {"internalType": "string", "name": "_metadata", "type": "string"},
        ],
        "name": "addRecipient",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "bytes32", "name": "_recipientId", "type": "bytes32"}],
        "name": "removeRecipient",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]
