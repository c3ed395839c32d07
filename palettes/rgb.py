# -*- coding: utf-8 -*-
"""
Tincture: Describing color in words
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: palettes/rgb.py — The canonical named colors, in plain RGB.

``RGBA8888_CODES`` is the single source of the 50 canonical colors; the IPT
palette converts the same codes into its own space.
"""

from typing import Final, Mapping
from types import MappingProxyType

from tincture_colorengine import RGBSpace
from palettes.table import NamedColorTable

__all__ = [
    "RGBA8888_CODES",
    "RGB_COLORS",
]

# Display RGB with red in the most significant byte.
RGBA8888_CODES: Final[Mapping[str, int]] = MappingProxyType({
    "transparent": 0x00000000,
    "black":       0x000000FF,
    "gray":        0x808080FF,
    "silver":      0xB6B6B6FF,
    "white":       0xFFFFFFFF,
    "red":         0xFF0000FF,
    "orange":      0xFF7F00FF,
    "yellow":      0xFFFF00FF,
    "green":       0x00FF00FF,
    "blue":        0x0000FFFF,
    "indigo":      0x520FE0FF,
    "violet":      0x9040EFFF,
    "purple":      0xC000FFFF,
    "brown":       0x8F573BFF,
    "pink":        0xFFA0E0FF,
    "magenta":     0xF500F5FF,
    "brick":       0xD5524AFF,
    "ember":       0xF55A32FF,
    "salmon":      0xFF6262FF,
    "chocolate":   0x683818FF,
    "tan":         0xD2B48CFF,
    "bronze":      0xCE8E31FF,
    "cinnamon":    0xD2691DFF,
    "apricot":     0xFFA828FF,
    "peach":       0xFFBF81FF,
    "pear":        0xD3E330FF,
    "saffron":     0xFFD510FF,
    "butter":      0xFFF288FF,
    "chartreuse":  0xC8FF41FF,
    "cactus":      0x30A000FF,
    "lime":        0x93D300FF,
    "olive":       0x818000FF,
    "fern":        0x4E7942FF,
    "moss":        0x204608FF,
    "celery":      0x7DFF73FF,
    "sage":        0xABE3C5FF,
    "jade":        0x3FBF3FFF,
    "cyan":        0x00FFFFFF,
    "mint":        0x7FFFD4FF,
    "teal":        0x007F7FFF,
    "turquoise":   0x2ED6C9FF,
    "sky":         0x10C0E0FF,
    "cobalt":      0x0046ABFF,
    "denim":       0x3088B8FF,
    "navy":        0x000080FF,
    "lavender":    0xB991FFFF,
    "plum":        0xBE0DC6FF,
    "mauve":       0xAB73ABFF,
    "rose":        0xE61E78FF,
    "raspberry":   0x911437FF,
})

RGB_COLORS: Final[NamedColorTable] = NamedColorTable(
    RGBSpace, {name: RGBSpace.from_rgba8888(code) for name, code in RGBA8888_CODES.items()})
