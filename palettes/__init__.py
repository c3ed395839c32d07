# -*- coding: utf-8 -*-
"""
Tincture: Describing color in words
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Named color tables, one per packed color space.
"""

from palettes.table import CANONICAL_ALIASES, NamedColorTable
from palettes.rgb import RGB_COLORS, RGBA8888_CODES
from palettes.ipt import IPT_COLORS
from palettes.oklab import OKLAB_CODES, OKLAB_COLORS

__all__ = [
    "CANONICAL_ALIASES",
    "NamedColorTable",
    "RGBA8888_CODES",
    "RGB_COLORS",
    "IPT_COLORS",
    "OKLAB_CODES",
    "OKLAB_COLORS",
    "TABLES",
]

TABLES = {
    "rgb": RGB_COLORS,
    "ipt": IPT_COLORS,
    "oklab": OKLAB_COLORS,
}
