"""
ABI and EIP-712 type definitions for escrow funding
"""

from typing import Any, Dict, List

# EIP-712 primary type for ERC-3009 transfers
TRANSFER_AUTH_PRIMARY_TYPE = "TransferWithAuthorization"

TRANSFER_AUTH_EIP712_TYPES: Dict[str, List[Dict[str, str]]] = {
    TRANSFER_AUTH_PRIMARY_TYPE: [
        {"name": "from", "type": "address"},
        {"name": "to", "type": "address"},
        {"name": "value", "type": "uint256"},
        {"name": "validAfter", "type": "uint256"},
        {"name": "validBefore", "type": "uint256"},
        {"name": "nonce", "type": "bytes32"},
    ],
}

FUND_JOB_METHOD = "fundJobWithAuthorization"

# MDP escrow contract: pulls the full amount from the poster with an ERC-3009
# authorization and splits escrow and platform fee on-chain
ESCROW_FUND_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [
            {"name": "jobId", "type": "bytes32"},
            {"name": "poster", "type": "address"},
            {"name": "agentExecutor", "type": "address"},
            {"name": "agentPayout", "type": "address"},
            {"name": "totalAmount", "type": "uint256"},
            {"name": "validAfter", "type": "uint256"},
            {"name": "validBefore", "type": "uint256"},
            {"name": "nonce", "type": "bytes32"},
            {"name": "v", "type": "uint8"},
            {"name": "r", "type": "bytes32"},
            {"name": "s", "type": "bytes32"},
        ],
        "name": FUND_JOB_METHOD,
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]
