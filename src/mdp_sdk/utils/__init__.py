"""
MDP SDK Utility Functions
"""

from mdp_sdk.utils.amounts import USDC_DECIMALS, USDC_SCALE, format_usdc, parse_usdc

__all__ = [
    "USDC_DECIMALS",
    "USDC_SCALE",
    "format_usdc",
    "parse_usdc",
]
