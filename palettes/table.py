# -*- coding: utf-8 -*-
"""
Tincture: Describing color in words
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: palettes/table.py — Read-only name to packed color tables.

A ``NamedColorTable`` is built once from a mapping of primary names plus an
alias map, and never changes afterwards. It provides the views the parser
and the best-match search read from:

    - ``lookup(name)``        exact, case-sensitive; misses give TRANSPARENT
    - ``names``               primary names, alphabetical
    - ``names_by_hue``        see ``_hue_key`` for the order
    - ``names_by_lightness``  darkest first
    - ``searchable``          ``names_by_hue`` without ``"transparent"``

Aliases resolve in ``lookup`` but never appear in a sorted view.
"""

import warnings
from types import MappingProxyType
from typing import Final, Iterator, Mapping, Tuple, Type

__all__ = [
    "CANONICAL_ALIASES",
    "NamedColorTable",
]

# alias -> primary name
CANONICAL_ALIASES: Final[Mapping[str, str]] = MappingProxyType({
    "grey": "gray",
    "gold": "saffron",
    "puce": "mauve",
    "sand": "tan",
    "skin": "peach",
    "coral": "salmon",
    "azure": "sky",
    "ocean": "teal",
    "sapphire": "cobalt",
})


class NamedColorTable:
    """
    Immutable table of named packed colors for one color space.

    Args:
        space: The ``PackedSpace`` subclass the colors belong to.
        entries: Primary name -> packed color.
        aliases: Alias -> primary name. Aliases naming an unknown primary
            are ignored; aliases shadowing a primary name warn and are
            ignored too.
    """

    __slots__ = ("space", "_colors", "_aliases", "_by_hue", "_by_lightness", "_names")

    def __init__(self, space: Type, entries: Mapping[str, int],
                 aliases: Mapping[str, str] = CANONICAL_ALIASES) -> None:
        self.space = space
        self._colors = MappingProxyType(dict(entries))

        resolved = {}
        for alias, primary in aliases.items():
            if alias in self._colors:
                warnings.warn(f"Alias '{alias}' shadows a primary color name and is ignored.",
                              stacklevel=2)
                continue
            if primary in self._colors:
                resolved[alias] = primary
        self._aliases = MappingProxyType(resolved)

        self._names = tuple(sorted(self._colors))
        self._by_hue = tuple(sorted(self._colors, key=self._hue_key))
        self._by_lightness = tuple(sorted(self._colors,
                                          key=lambda n: (space.lightness(self._colors[n]), n)))

    def _hue_key(self, name: str) -> Tuple[int, float, float, str]:
        # Mostly transparent entries first, then grays darkest first, then
        # chromatic colors by hue and lightness.
        color = self._colors[name]
        space = self.space
        if (color >> 24 & 0xFE) < 0x80:
            return 0, 0.0, 0.0, name
        lightness = space.lightness(color)
        if space.colorfulness(color) <= space.GRAY_THRESHOLD:
            return 1, lightness, 0.0, name
        return 2, space.hue(color), lightness, name

    # --- Lookup ---

    def lookup(self, name: str) -> int:
        """Packed color for ``name`` or an alias of it; TRANSPARENT on a miss."""
        color = self._colors.get(name)
        if color is None:
            primary = self._aliases.get(name)
            if primary is None:
                return self.space.TRANSPARENT
            color = self._colors[primary]
        return color

    def __getitem__(self, name: str) -> int:
        if name in self._colors:
            return self._colors[name]
        return self._colors[self._aliases[name]]

    def __contains__(self, name: object) -> bool:
        return name in self._colors or name in self._aliases

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __repr__(self) -> str:
        return f"NamedColorTable({self.space.NAME!r}, {len(self)} colors, {len(self._aliases)} aliases)"

    # --- Views ---

    @property
    def colors(self) -> Mapping[str, int]:
        return self._colors

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    @property
    def names_by_hue(self) -> Tuple[str, ...]:
        return self._by_hue

    @property
    def colors_by_hue(self) -> Tuple[int, ...]:
        return tuple(self._colors[n] for n in self._by_hue)

    @property
    def names_by_lightness(self) -> Tuple[str, ...]:
        return self._by_lightness

    @property
    def searchable(self) -> Tuple[str, ...]:
        """Names a description search may pick from."""
        return tuple(n for n in self._by_hue if n != "transparent")
