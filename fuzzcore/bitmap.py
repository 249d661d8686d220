"""A fixed-size bit map addressed by hashed values."""

from collections.abc import Iterator


class ValueBitMap:
    """A map of ``MAP_SIZE_IN_BITS`` bits with hashing insertion."""

    MAP_SIZE_IN_BITS = 1 << 16
    MAP_PRIME_MOD = 65371  # Largest prime below MAP_SIZE_IN_BITS.

    def __init__(self) -> None:
        self._map = bytearray(self.MAP_SIZE_IN_BITS // 8)

    def reset(self) -> None:
        """Clear every bit."""
        self._map = bytearray(self.MAP_SIZE_IN_BITS // 8)

    def add_value(self, value: int) -> bool:
        """Set the bit for ``value``; return True if it was previously clear."""
        byte_idx, bit_idx = divmod(value % self.MAP_SIZE_IN_BITS, 8)
        old = self._map[byte_idx]
        new = old | (1 << bit_idx)
        self._map[byte_idx] = new
        return new != old

    def add_value_mod_prime(self, value: int) -> bool:
        """Like :meth:`add_value`, hashing ``value`` modulo a prime first."""
        return self.add_value(value % self.MAP_PRIME_MOD)

    def get(self, idx: int) -> bool:
        """Return whether bit ``idx`` is set."""
        if not 0 <= idx < self.MAP_SIZE_IN_BITS:
            raise IndexError(f"bit index {idx} out of range")
        byte_idx, bit_idx = divmod(idx, 8)
        return bool(self._map[byte_idx] & (1 << bit_idx))

    def size_in_bits(self) -> int:
        """Return the number of bits in the map."""
        return self.MAP_SIZE_IN_BITS

    def __iter__(self) -> Iterator[int]:
        """Yield the indices of set bits in ascending order."""
        for byte_idx, byte in enumerate(self._map):
            if byte:
                for bit_idx in range(8):
                    if byte & (1 << bit_idx):
                        yield byte_idx * 8 + bit_idx