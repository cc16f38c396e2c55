"""
USDC amount helpers.

USDC uses 6 decimals; on-chain amounts are integers in base units.
Conversion is done on decimal strings so large amounts never pass through
floating point.
"""

from decimal import Decimal

USDC_DECIMALS = 6
USDC_SCALE = 10**USDC_DECIMALS


def format_usdc(base_units: int | str) -> str:
    """
    Format base units as a USDC decimal string.

    Trailing fractional zeros are dropped: 1500000 -> "1.5", 1000000 -> "1".

    Args:
        base_units: Amount in base units (int or decimal integer string)

    Returns:
        Decimal string
    """
    amount = int(base_units)
    sign = "-" if amount < 0 else ""
    whole, fraction = divmod(abs(amount), USDC_SCALE)
    if fraction == 0:
        return f"{sign}{whole}"
    fraction_str = str(fraction).rjust(USDC_DECIMALS, "0").rstrip("0")
    return f"{sign}{whole}.{fraction_str}"


def parse_usdc(amount: int | float | str | Decimal) -> int:
    """
    Parse a USDC amount ("100.50", 2, Decimal("0.1")) to base units.

    Digits beyond the 6th decimal place are truncated.

    Raises:
        ValueError: If amount is not a plain decimal number
    """
    if isinstance(amount, float):
        text = format(Decimal(repr(amount)), "f")
    elif isinstance(amount, Decimal):
        text = format(amount, "f")
    else:
        text = str(amount).strip()

    whole, _, fraction = text.partition(".")
    digits = whole[1:] if whole[:1] in ("-", "+") else whole
    if (digits and not digits.isdigit()) or (fraction and not fraction.isdigit()):
        raise ValueError(f"Invalid USDC amount: {amount!r}")
    if not digits and not fraction:
        raise ValueError(f"Invalid USDC amount: {amount!r}")

    sign = "-" if whole.startswith("-") else ""
    padded = fraction.ljust(USDC_DECIMALS, "0")[:USDC_DECIMALS]
    return int(f"{sign}{digits or '0'}{padded}")
