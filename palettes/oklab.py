# -*- coding: utf-8 -*-
"""
Tincture: Describing color in words
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: palettes/oklab.py — The canonical named colors as packed Oklab.

These values are stored rather than converted: several of them (red and
white among others) reconstruct marginally outside the sRGB cube and are only
brought inside by a parse's final gamut limiting.
"""

from typing import Final, Mapping
from types import MappingProxyType

from tincture_colorengine import OklabSpace
from palettes.table import NamedColorTable

__all__ = [
    "OKLAB_CODES",
    "OKLAB_COLORS",
]

OKLAB_CODES: Final[Mapping[str, int]] = MappingProxyType({
    "transparent": 0x007F7F00,
    "black":       0xFE7F7F00,
    "gray":        0xFE7F80A1,
    "silver":      0xFE7F80CC,
    "white":       0xFE7F80FF,
    "red":         0xFE909CA0,
    "orange":      0xFE938CBE,
    "yellow":      0xFE9976F7,
    "green":       0xFE9662DD,
    "blue":        0xFE587B73,
    "indigo":      0xFE5F8877,
    "violet":      0xFE658F96,
    "purple":      0xFE649B9E,
    "brown":       0xFE88878B,
    "pink":        0xFE7A8ED5,
    "magenta":     0xFE6AA2AE,
    "brick":       0xFE8992A1,
    "ember":       0xFE8E93AE,
    "salmon":      0xFE8895B6,
    "chocolate":   0xFE89866B,
    "tan":         0xFE8781CE,
    "bronze":      0xFE9084B7,
    "cinnamon":    0xFE8F8BA7,
    "apricot":     0xFE9385D0,
    "peach":       0xFE8B85DD,
    "pear":        0xFE9576E2,
    "saffron":     0xFE977DE4,
    "butter":      0xFE8F7CF4,
    "chartreuse":  0xFE9571EF,
    "cactus":      0xFE916BA4,
    "lime":        0xFE956FCF,
    "olive":       0xFE907A9C,
    "fern":        0xFE88768F,
    "moss":        0xFE897560,
    "celery":      0xFE8F6BE6,
    "sage":        0xFE8278E1,
    "jade":        0xFE8F6BBA,
    "cyan":        0xFE7A6CE7,
    "mint":        0xFE8270EB,
    "teal":        0xFE7C7391,
    "turquoise":   0xFE7D6FCE,
    "sky":         0xFE7671C2,
    "cobalt":      0xFE6A7B72,
    "denim":       0xFE74779F,
    "navy":        0xFE667D49,
    "lavender":    0xFE6F89C2,
    "plum":        0xFE6D9C95,
    "mauve":       0xFE788AA9,
    "rose":        0xFE7F9E9D,
    "raspberry":   0xFE849572,
})

OKLAB_COLORS: Final[NamedColorTable] = NamedColorTable(OklabSpace, OKLAB_CODES)
