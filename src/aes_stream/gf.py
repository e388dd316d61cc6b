"""Arithmetic in GF(2^8) with the AES reduction polynomial."""

from __future__ import annotations

from .tables import DEFAULT_TABLES, AesTables, xtime


def gf_mul(a: int, b: int, tables: AesTables = DEFAULT_TABLES) -> int:
    """
    Multiply two field elements using the log/antilog tables.

    Args:
        a: First operand (0-255)
        b: Second operand (0-255)
        tables: Constant tables providing log and antilog

    Returns:
        a * b in GF(2^8)
    """
    # log(0) is undefined
    if a == 0 or b == 0:
        return 0
    return tables.antilog[(tables.log[a] + tables.log[b]) % 255]


__all__ = ["gf_mul", "xtime"]
