"""Offset helpers shared across buffer services."""

from __future__ import annotations

from typing import Tuple

from .sync import BufferValidationError


def clamp_cursor(offset: int, length: int) -> int:
    return max(0, min(offset, length))


def ensure_range(start: int, end: int, length: int) -> Tuple[int, int]:
    if start < 0 or end > length:
        raise BufferValidationError(
            f"Range [{start}, {end}) outside buffer of length {length}",
            offset=start if start < 0 else end,
        )
    if start > end:
        raise BufferValidationError(
            f"Range start {start} is after end {end}", offset=start
        )
    return start, end
