# -*- coding: utf-8 -*-
"""
Tincture: Describing color in words
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: tincture_mixing.py — Even and weighted blends of packed colors.

Both blends are left folds over the input, interpolating every byte
(alpha included) of a running result toward each new color::

    even:    running = lerp(running, c[k], 1 / (k + 1))
    uneven:  total  += w[k];  running = lerp(running, c[k], w[k] / total)

The fold is order-dependent only through byte truncation; mathematically
both are weighted averages.
"""

import math
from typing import Iterator, List, Optional, Sequence, Tuple

from tincture_packing import lerp_colors

__all__ = [
    "mix",
    "uneven_mix",
    "MixAccumulator",
    "append_gradient",
]


def mix(colors: Sequence[int], transparent: int = 0) -> int:
    """
    Mixes colors with equal weight.

    Args:
        colors: Packed colors of one space.
        transparent: Value returned for an empty sequence.

    Returns:
        The blended packed color. A single color comes back unchanged.
    """
    if not colors:
        return transparent
    result = colors[0]
    for denom, color in enumerate(colors[1:], start=2):
        result = lerp_colors(result, color, 1.0 / denom)
    return result


def uneven_mix(entries: Sequence[Tuple[int, float]], transparent: int = 0) -> int:
    """
    Mixes (color, weight) pairs, each pulling the result by its weight.

    Entries whose weight is not a positive finite number are skipped after
    the first. If the first weight is zero or not finite the next accepted
    entry replaces the first color entirely.

    Args:
        entries: Ordered (packed color, weight) pairs.
        transparent: Value returned when ``entries`` is empty.
    """
    if not entries:
        return transparent
    result, total = entries[0]
    total = max(total, 0.0) if math.isfinite(total) else 0.0
    for color, weight in entries[1:]:
        if not (0.0 < weight < math.inf):
            continue
        total += weight
        result = lerp_colors(result, color, weight / total)
    return result


class MixAccumulator:
    """
    Ordered (color, weight) pairs collected while reading a description.

    Each accumulator is owned by a single parse call; nothing is shared
    between calls.
    """

    __slots__ = ("_colors", "_weights")

    def __init__(self) -> None:
        self._colors: List[int] = []
        self._weights: List[float] = []

    def add(self, color: int, weight: float = 1.0) -> None:
        self._colors.append(color)
        self._weights.append(weight)

    def set_last_weight(self, weight: float) -> bool:
        """Re-weights the most recent entry. Returns False if there is none."""
        if not self._weights:
            return False
        self._weights[-1] = weight
        return True

    @property
    def colors(self) -> Tuple[int, ...]:
        return tuple(self._colors)

    @property
    def entries(self) -> Tuple[Tuple[int, float], ...]:
        return tuple(zip(self._colors, self._weights))

    def mix(self, transparent: int = 0, weighted: bool = True) -> int:
        """Blends the entries, honoring weights unless ``weighted`` is False."""
        if weighted:
            return uneven_mix(self.entries, transparent)
        return mix(self._colors, transparent)

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[Tuple[int, float]]:
        return iter(self.entries)

    def __repr__(self) -> str:
        body = ", ".join(f"0x{c:08X}^{w:g}" for c, w in self.entries)
        return f"MixAccumulator([{body}])"


def append_gradient(colors: Optional[List[int]], start: int, end: int, steps: int) -> List[int]:
    """
    Appends ``steps`` colors running from ``start`` to ``end`` inclusive.

    With one step only ``start`` is appended; with ``steps`` of zero or less
    nothing is. A new list is created when ``colors`` is None.

    Returns:
        The list that was appended to.
    """
    if colors is None:
        colors = []
    if steps <= 0:
        return colors
    if steps == 1:
        colors.append(start)
        return colors
    colors.extend(lerp_colors(start, end, i / (steps - 1)) for i in range(steps))
    return colors
