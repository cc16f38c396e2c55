"""
Signer utility functions
"""

from typing import Any

from mdp_sdk.config import NetworkConfig

# Canonical EIP-712 domain field order and types
_EIP712_DOMAIN_FIELDS: list[tuple[str, str]] = [
    ("name", "string"),
    ("version", "string"),
    ("chainId", "uint256"),
    ("verifyingContract", "address"),
    ("salt", "bytes32"),
]


def eip712_domain_type(domain: dict[str, Any]) -> list[dict[str, str]]:
    """Build an EIP712Domain type array from the keys present in *domain*.

    Preserves the canonical field order defined in EIP-712.
    """
    return [{"name": name, "type": typ} for name, typ in _EIP712_DOMAIN_FIELDS if name in domain]


def build_typed_data(
    domain: dict[str, Any],
    types: dict[str, Any],
    primary_type: str,
    message: dict[str, Any],
) -> dict[str, Any]:
    """Assemble the full EIP-712 document expected by wallet APIs."""
    return {
        "types": {"EIP712Domain": eip712_domain_type(domain), **types},
        "domain": domain,
        "primaryType": primary_type,
        "message": message,
    }


def to_json_typed_data(typed_data: dict[str, Any]) -> dict[str, Any]:
    """Convert bytes values (bytes32 nonces) to 0x hex so the document is JSON-safe."""

    def convert(value: Any) -> Any:
        if isinstance(value, (bytes, bytearray)):
            return "0x" + bytes(value).hex()
        if isinstance(value, dict):
            return {k: convert(v) for k, v in value.items()}
        if isinstance(value, list):
            return [convert(v) for v in value]
        return value

    return convert(typed_data)


def resolve_rpc_url(chain_id: int, override: str | None = None) -> str | None:
    """Resolve the RPC endpoint for a chain.

    Checks in order:
    1. An explicit override URL
    2. NetworkConfig.RPC_URLS
    3. None (no provider available)
    """
    if override:
        return override
    return NetworkConfig.get_rpc_url(chain_id)
