"""
CRC-32 for WOZ images.

The WOZ header and WRIT chunk use the standard reflected CRC-32 (the
zlib/PKZIP variant, polynomial 0xEDB88320, initial value and final XOR
0xFFFFFFFF).
"""

from typing import Tuple

CRC32_POLY = 0xEDB88320
CRC32_INIT = 0xFFFFFFFF


class CRC32Calculator:
    """Table-driven CRC-32 calculator."""

    def __init__(self):
        """Initialize with lookup table for fast calculation."""
        self._table = self._generate_table()

    @staticmethod
    def _generate_table() -> Tuple[int, ...]:
        """Generate CRC lookup table."""
        table = []
        for i in range(256):
            crc = i
            for _ in range(8):
                if crc & 1:
                    crc = (crc >> 1) ^ CRC32_POLY
                else:
                    crc >>= 1
            table.append(crc)
        return tuple(table)

    @property
    def table(self) -> Tuple[int, ...]:
        return self._table

    def calculate(self, data: bytes) -> int:
        """
        Calculate CRC-32 for data.

        Args:
            data: Bytes to calculate CRC for

        Returns:
            32-bit CRC value
        """
        crc = CRC32_INIT
        table = self._table
        for byte in data:
            crc = table[(crc ^ byte) & 0xFF] ^ (crc >> 8)
        return crc ^ CRC32_INIT


# Global CRC calculator instance
_crc = CRC32Calculator()


def crc32(data: bytes) -> int:
    """Calculate CRC-32 for data."""
    return _crc.calculate(data)
