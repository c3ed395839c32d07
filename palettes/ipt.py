# -*- coding: utf-8 -*-
"""
Tincture: Describing color in words
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: palettes/ipt.py — The canonical named colors, converted to IPT.
"""

from typing import Final

from tincture_colorengine import IPTSpace
from palettes.rgb import RGBA8888_CODES
from palettes.table import NamedColorTable

__all__ = ["IPT_COLORS"]


IPT_COLORS: Final[NamedColorTable] = NamedColorTable(
    IPTSpace, {name: IPTSpace.from_rgba8888(code) for name, code in RGBA8888_CODES.items()})
