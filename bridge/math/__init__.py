"""Exact decimal normalization of token amounts."""

from bridge.math.normalize import to_decimal, to_fiat, to_rate, to_smallest_unit

__all__ = ["to_decimal", "to_fiat", "to_rate", "to_smallest_unit"]
