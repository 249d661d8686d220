"""Byte swapping and bit counting on fixed-width unsigned integers."""

_WIDTHS = (1, 2, 4, 8)
_U64_LIMIT = 1 << 64


def _check_u64(value: int) -> None:
    if not 0 <= value < _U64_LIMIT:
        raise ValueError(f"value {value!r} does not fit in 64 unsigned bits")


def bswap(value: int, width: int) -> int:
    """Reverse the byte order of an unsigned integer that is ``width`` bytes wide.

    ``width`` must be 1, 2, 4 or 8.
    """
    if width not in _WIDTHS:
        raise ValueError(f"unsupported width {width!r}; expected one of {_WIDTHS}")
    if not 0 <= value < (1 << (8 * width)):
        raise ValueError(f"value {value!r} does not fit in {width} byte(s)")
    return int.from_bytes(value.to_bytes(width, "big"), "little")


def clzll(value: int) -> int:
    """Count the leading zero bits of a 64-bit unsigned integer (64 for zero)."""
    _check_u64(value)
    return 64 - value.bit_length()


def popcountll(value: int) -> int:
    """Count the set bits of a 64-bit unsigned integer."""
    _check_u64(value)
    return bin(value).count("1")