"""
Marketplace API groups
"""

from mdp_sdk.api.auth import AuthAPI
from mdp_sdk.api.escrow import EscrowAPI
from mdp_sdk.api.payments import PaymentsAPI

__all__ = [
    "AuthAPI",
    "EscrowAPI",
    "PaymentsAPI",
]
