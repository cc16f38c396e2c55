"""
Encoding utilities for x402 payment headers
"""

import base64
import json
from typing import Any, TypeVar

T = TypeVar("T")


def encode_base64(data: str | bytes) -> str:
    """Encode data to base64"""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.b64encode(data).decode("utf-8")


def decode_base64(data: str) -> str:
    """Decode base64 to string"""
    return base64.b64decode(data).decode("utf-8")


def encode_payment_header(payload: Any) -> str:
    """Encode payment payload to base64 compact JSON for the settle call"""
    if hasattr(payload, "model_dump"):
        data = payload.model_dump(by_alias=True, exclude_none=True)
    else:
        data = payload
    return encode_base64(json.dumps(data, separators=(",", ":")))


def decode_payment_header(encoded: str, model_class: type[T] | None = None) -> T | dict[str, Any]:
    """Decode payment payload from a base64 header"""
    data = json.loads(decode_base64(encoded))
    if model_class is not None:
        return model_class(**data)
    return data


def bytes_to_hex(data: bytes, prefix: bool = True) -> str:
    """Convert bytes to hex string"""
    hex_str = data.hex()
    return f"0x{hex_str}" if prefix else hex_str


def hex_to_bytes(hex_str: str) -> bytes:
    """Convert hex string to bytes"""
    if hex_str.startswith(("0x", "0X")):
        hex_str = hex_str[2:]
    return bytes.fromhex(hex_str)
