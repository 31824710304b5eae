from __future__ import annotations

import logging
import struct
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# String / Array / Object headers are the widest JSON variants: three words each.
_HEADER_WORDS = 3
_SUPPORTED_WIDTHS = (4, 8)


def _align(n: int, to: int) -> int:
    return (n + to - 1) // to * to


@dataclass(frozen=True)
class LayoutConfig:
    """Byte costs of the modelled JSON value representation.

    All fields are in bytes and depend only on the pointer width:
    - value_envelope: one tagged-union node (discriminant + widest payload).
    - string_overhead: pointer/length/capacity header carried by every string.
    - map_entry_overhead: per-entry bookkeeping of an object's table.
    """

    pointer_width: int
    value_envelope: int
    string_overhead: int
    map_entry_overhead: int

    @classmethod
    def for_host(cls) -> "LayoutConfig":
        """Derive the layout from the running interpreter (native struct alignment)."""
        width = struct.calcsize("P")
        cfg = cls(
            pointer_width=width,
            value_envelope=struct.calcsize(f"B{_HEADER_WORDS}P"),
            string_overhead=struct.calcsize(f"{_HEADER_WORDS}P"),
            map_entry_overhead=width * 3,
        )
        logger.debug("host layout: %s", cfg)
        return cfg

    @classmethod
    def for_pointer_width(cls, width: int) -> "LayoutConfig":
        """Layout for a 32-bit (4) or 64-bit (8) target, regardless of the host."""
        if width not in _SUPPORTED_WIDTHS:
            raise ValueError(f"unsupported pointer width: {width} (expected one of {_SUPPORTED_WIDTHS})")

        header = width * _HEADER_WORDS
        return cls(
            pointer_width=width,
            # 1-byte tag padded up to the payload's word alignment
            value_envelope=_align(1, width) + header,
            string_overhead=header,
            map_entry_overhead=width * 3,
        )


DEFAULT_CONFIG = LayoutConfig.for_host()

POINTER_WIDTH = DEFAULT_CONFIG.pointer_width
VALUE_ENVELOPE = DEFAULT_CONFIG.value_envelope
STRING_OVERHEAD = DEFAULT_CONFIG.string_overhead
MAP_ENTRY_OVERHEAD = DEFAULT_CONFIG.map_entry_overhead
