# -*- coding: utf-8 -*-
"""
Tincture: Describing color in words
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: tincture_bestmatch.py — Finding the description closest to a color.

The search is exhaustive. Every multiset of ``mix_count`` searchable names
(in hue order) is mixed evenly and then adjusted by all 81 combinations of
lightness level and saturation level in -4..4::

    label index = (saturation level + 4) * 9 + (lightness level + 4)

Each candidate is converted to continuous Oklab in one batch and scored by
squared Euclidean distance to the target. Ties keep the candidate with the
lower label index, then the earlier combination.
"""

import itertools
import warnings
from typing import Final, List, Optional, Tuple

import numpy as np

from tincture_colorengine import srgb_to_oklab
from tincture_describe import RGB_PARSER, DescriptionParser, Grammar
from tincture_mixing import mix

__all__ = [
    "LEVELS",
    "adjective_labels",
    "best_match",
]

LEVELS: Final[int] = 9
_CENTER: Final[int] = LEVELS // 2


def _words(grammar: Grammar, lightness: int, saturation: int) -> Tuple[str, str]:
    light = ""
    if lightness:
        adjective = grammar.compound(1 if lightness > 0 else -1, 0)
        if adjective is not None:
            light = adjective.form(abs(lightness)) + " "
    rich = ""
    if saturation:
        adjective = grammar.compound(0, 1 if saturation > 0 else -1)
        if adjective is not None:
            rich = adjective.form(abs(saturation)) + " "
    return light, rich


def adjective_labels(grammar: Grammar) -> Tuple[str, ...]:
    """
    Builds the 81 adjective prefixes of ``grammar``.

    Entry ``sat * 9 + lit`` describes saturation level ``sat - 4`` and
    lightness level ``lit - 4``. Every non-empty label ends with a space.
    Where both levels have the same magnitude and the vocabulary has the
    matching compound (bright, pale, deep, weak) the pair collapses to that
    one word; the center entry is the empty string.
    """
    labels: List[str] = []
    for sat in range(LEVELS):
        for lit in range(LEVELS):
            lightness, saturation = lit - _CENTER, sat - _CENTER
            if lightness and abs(lightness) == abs(saturation):
                compound = grammar.compound(1 if lightness > 0 else -1, 1 if saturation > 0 else -1)
                if compound is not None:
                    labels.append(compound.form(abs(lightness)) + " ")
                    continue
            light, rich = _words(grammar, lightness, saturation)
            labels.append(light + rich)
    return tuple(labels)


def best_match(color: int, mix_count: int = 1, parser: DescriptionParser = RGB_PARSER,
               max_tries: Optional[int] = None) -> str:
    """
    Finds the description that ``parser`` reads as closest to ``color``.

    Args:
        color: Packed color in the parser's space.
        mix_count: How many names to mix; 1 to 3 is practical.
        parser: Parser whose grammar supplies space, names and labels.
        max_tries: Optional cap on name combinations. When it cuts the
            search short a warning is issued and the best result so far
            is returned.

    Returns:
        Adjective label followed by the chosen names, space-separated.

    Raises:
        ValueError: If ``mix_count`` is less than 1.
    """
    if mix_count < 1:
        raise ValueError(f"mix_count must be at least 1, got {mix_count}")

    grammar = parser.grammar
    space = grammar.space
    names = grammar.table.searchable
    palette = [grammar.table[name] for name in names]
    labels = adjective_labels(grammar)
    deltas = [((lit - _CENTER) * grammar.lightness_step, (sat - _CENTER) * grammar.saturation_step)
              for sat in range(LEVELS) for lit in range(LEVELS)]

    target = srgb_to_oklab(space.to_rgb_array(color))

    best_distance = np.inf
    best_label = _CENTER * LEVELS + _CENTER
    best_combo: Tuple[int, ...] = ()
    for tries, combo in enumerate(itertools.combinations_with_replacement(range(len(names)), mix_count)):
        if max_tries is not None and tries >= max_tries:
            warnings.warn(f"best_match stopped after {max_tries} of the possible name "
                          f"combinations; the result may not be optimal.", stacklevel=2)
            break
        base = mix([palette[i] for i in combo], space.TRANSPARENT)
        candidates = np.array([parser.adjust(base, dl, ds) for dl, ds in deltas], dtype=np.int64)
        lab = srgb_to_oklab(space.to_rgb_array(candidates))
        distance = np.sum((lab - target) ** 2, axis=1)
        k = int(np.argmin(distance))
        if distance[k] < best_distance or (distance[k] == best_distance and k < best_label):
            best_distance = distance[k]
            best_label = k
            best_combo = combo

    if not best_combo:
        return ""
    return labels[best_label] + " ".join(names[i] for i in best_combo)
