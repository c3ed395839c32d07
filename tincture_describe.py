# -*- coding: utf-8 -*-
"""
Tincture: Describing color in words
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Color Description Parser
========================
Turns phrases such as ``"darker rich mint sage"`` or ``"red^3 blue"`` into a
single packed color.

Grammar:
    A description is split into tokens on every run of characters outside
    the grammar's token alphabet. Each token is exactly one of:

    - an **adjective**, changing lightness and/or saturation,
    - a **weight** (grammars with numeric weights only), re-weighting the
      color named just before it,
    - a **color name**, looked up in the grammar's table and appended to the
      mix. Unknown names contribute the space's TRANSPARENT color.

Adjectives:
    ===========  =========  ==========  ===============================
    stem         lightness  saturation  recognised lengths -> level
    ===========  =========  ==========  ===============================
    light        +          .           5, 7, 8, 9        -> 1, 2, 3, 4
    bright       +          +           6, 8, 9, 10       -> 1, 2, 3, 4
    pale         +          -           4, 5, 6, 7, 8     -> 1, 2, 3, 4, 4
    weak         -          -           4, 6, 7, 8        -> 1, 2, 3, 4
    rich         .          +           4, 6, 7, 8        -> 1, 2, 3, 4
    dark         -          .           4, 6, 7, 8        -> 1, 2, 3, 4
    dull         .          -           4, 6, 7, 8        -> 1, 2, 3, 4
    deep         -          +           4, 6, 7, 8        -> 1, 2, 3, 4
    ===========  =========  ==========  ===============================

    A token is taken for an adjective when its first character and one
    signature character match the stem; the first such adjective decides.
    Only the token's length sets the level, so ``"lightest"`` and
    ``"lightxyz"`` are both level 3. A matching token of any other length is
    looked up as a color name instead.

Result:
    The collected colors are mixed, then lightened or darkened by the net
    lightness delta, then enriched or dulled by the net saturation delta,
    and finally limited to the sRGB gamut. With no color entry at all the
    result is the space's TRANSPARENT color, whatever adjectives were read.
"""

import math
import re
from dataclasses import dataclass
from typing import Dict, Final, Optional, Pattern, Tuple, Type

from palettes import IPT_COLORS, OKLAB_COLORS, RGB_COLORS, NamedColorTable
from tincture_colorengine import IPTSpace, OklabSpace, PackedSpace, RGBSpace
from tincture_mixing import MixAccumulator

__all__ = [
    "Adjective",
    "LIGHT",
    "BRIGHT",
    "PALE",
    "WEAK",
    "RICH",
    "DARK",
    "DULL",
    "DEEP",
    "ADJECTIVES",
    "BASIC_ADJECTIVES",
    "Grammar",
    "SIMPLE_RGB",
    "SIMPLE_IPT",
    "BASIC_OKLAB",
    "parse_weight",
    "DescriptionParser",
    "RGB_PARSER",
    "IPT_PARSER",
    "OKLAB_PARSER",
    "PARSERS",
    "parse_description",
]


# =============================================================================
# 1. ADJECTIVES
# =============================================================================

@dataclass(slots=True, frozen=True)
class Adjective:
    """
    One adjective of the description vocabulary.

    Attributes:
        stem: Canonical level-1 spelling, e.g. ``"light"``.
        signature: Index of the character that tells this adjective apart
            from others sharing its first letter.
        lengths: (token length, level) pairs that are recognised.
        lightness: Sign of the lightness change: -1, 0 or +1.
        saturation: Sign of the saturation change: -1, 0 or +1.
    """
    stem: str
    signature: int
    lengths: Tuple[Tuple[int, int], ...]
    lightness: int
    saturation: int

    def matches(self, token: str) -> bool:
        return (len(token) > self.signature
                and token[0] == self.stem[0]
                and token[self.signature] == self.stem[self.signature])

    def level(self, token: str) -> int:
        """Level 1..4 encoded by the token's length, or 0 if not recognised."""
        size = len(token)
        for length, level in self.lengths:
            if length == size:
                return level
        return 0

    def form(self, level: int) -> str:
        """Spelling of this adjective at ``level`` (``"pale"`` -> ``"paler"``)."""
        if level <= 1:
            return self.stem
        if level == 2:
            return self.stem + ("r" if self.stem.endswith("e") else "er")
        if level == 3:
            return self.stem + ("st" if self.stem.endswith("e") else "est")
        return self.stem + "most"


def _ladder(stem_length: int) -> Tuple[Tuple[int, int], ...]:
    return ((stem_length, 1), (stem_length + 2, 2), (stem_length + 3, 3), (stem_length + 4, 4))


LIGHT: Final = Adjective("light", 2, _ladder(5), 1, 0)
BRIGHT: Final = Adjective("bright", 3, _ladder(6), 1, 1)
PALE: Final = Adjective("pale", 2, ((4, 1), (5, 2), (6, 3), (7, 4), (8, 4)), 1, -1)
WEAK: Final = Adjective("weak", 3, _ladder(4), -1, -1)
RICH: Final = Adjective("rich", 1, _ladder(4), 0, 1)
DARK: Final = Adjective("dark", 1, _ladder(4), -1, 0)
DULL: Final = Adjective("dull", 1, _ladder(4), 0, -1)
DEEP: Final = Adjective("deep", 3, _ladder(4), -1, 1)

# Order matters: the first adjective whose signature matches a token wins.
ADJECTIVES: Final[Tuple[Adjective, ...]] = (LIGHT, BRIGHT, PALE, WEAK, RICH, DARK, DULL, DEEP)
BASIC_ADJECTIVES: Final[Tuple[Adjective, ...]] = (LIGHT, RICH, DARK, DULL)


# =============================================================================
# 2. GRAMMARS
# =============================================================================

@dataclass(slots=True, frozen=True)
class Grammar:
    """
    Everything that distinguishes one description dialect from another.

    Attributes:
        space: Packed color space the result is expressed in.
        table: Named colors of that space.
        lightness_step: Lightness change of one adjective level.
        saturation_step: Saturation change of one adjective level.
        adjectives: Recognised vocabulary, in matching order.
        numeric_weights: If True, tokens starting with a digit re-weight
            the previous color.
        ignore_case: If True, adjectives match regardless of case. Color
            names are always case-sensitive.
        token_pattern: Separator pattern used to split descriptions.
        weighted: Mix with weights (True) or evenly (False).
    """
    space: Type[PackedSpace]
    table: NamedColorTable
    lightness_step: float
    saturation_step: float
    adjectives: Tuple[Adjective, ...]
    numeric_weights: bool
    ignore_case: bool
    token_pattern: Pattern[str]
    weighted: bool

    def compound(self, lightness: int, saturation: int) -> Optional[Adjective]:
        """The single adjective with both signs, if the vocabulary has one."""
        for adjective in self.adjectives:
            if adjective.lightness == lightness and adjective.saturation == saturation:
                return adjective
        return None


_WORD_AND_NUMBER: Final[Pattern[str]] = re.compile(r"[^a-zA-Z0-9_.]+")
_LETTERS: Final[Pattern[str]] = re.compile(r"[^a-zA-Z]+")

SIMPLE_RGB: Final = Grammar(RGBSpace, RGB_COLORS, 0.20, 0.20, ADJECTIVES,
                            numeric_weights=True, ignore_case=True,
                            token_pattern=_WORD_AND_NUMBER, weighted=True)
SIMPLE_IPT: Final = Grammar(IPTSpace, IPT_COLORS, 0.20, 0.20, ADJECTIVES,
                            numeric_weights=True, ignore_case=True,
                            token_pattern=_WORD_AND_NUMBER, weighted=True)
BASIC_OKLAB: Final = Grammar(OklabSpace, OKLAB_COLORS, 0.125, 0.20, BASIC_ADJECTIVES,
                             numeric_weights=False, ignore_case=False,
                             token_pattern=_LETTERS, weighted=False)


# Digits, optional fraction, optional exponent, optional float/double suffix.
_WEIGHT: Final[Pattern[str]] = re.compile(r"(\d+\.?\d*(?:[eE][+-]?\d+)?)[fFdD]?")


def parse_weight(token: str) -> float:
    """Reads a weight token; anything malformed or overflowing weighs 1.0."""
    match = _WEIGHT.fullmatch(token)
    if match is None:
        return 1.0
    weight = float(match.group(1))
    return weight if math.isfinite(weight) else 1.0


# =============================================================================
# 3. PARSER
# =============================================================================

class DescriptionParser:
    """
    Reads color descriptions according to one ``Grammar``.

    A parser holds no mutable state; one instance may serve any number of
    callers at once.
    """

    __slots__ = ("grammar",)

    def __init__(self, grammar: Grammar) -> None:
        self.grammar = grammar

    def __repr__(self) -> str:
        return f"DescriptionParser({self.grammar.space.NAME!r})"

    def classify(self, token: str) -> Tuple[Optional[Adjective], int]:
        """
        Returns (adjective, level) for an adjective token, else (None, 0).
        """
        word = token.lower() if self.grammar.ignore_case else token
        for adjective in self.grammar.adjectives:
            if adjective.matches(word):
                level = adjective.level(word)
                return (adjective, level) if level else (None, 0)
        return None, 0

    def adjust(self, color: int, lightness: float, saturation: float) -> int:
        """
        Applies net lightness then saturation changes, then gamut limiting.

        Both deltas are clamped to [-1, 1].
        """
        space = self.grammar.space
        lightness = min(max(lightness, -1.0), 1.0)
        saturation = min(max(saturation, -1.0), 1.0)
        if lightness > 0.0:
            color = space.lighten(color, lightness)
        elif lightness < 0.0:
            color = space.darken(color, -lightness)
        if saturation > 0.0:
            color = space.enrich(color, saturation)
        elif saturation < 0.0:
            color = space.dullen(color, -saturation)
        return space.limit_to_gamut(color)

    def parse(self, description: Optional[str], start: int = 0, length: int = -1) -> int:
        """
        Parses ``description`` into one packed color.

        Args:
            description: Text to read. None reads as empty.
            start: Index of the first character to read.
            length: Number of characters to read; negative reads to the end.

        Returns:
            The described color, or the space's TRANSPARENT color when no
            color name was found. Never raises for any text.
        """
        grammar = self.grammar
        transparent = grammar.space.TRANSPARENT
        if not description:
            return transparent
        text = description[start:] if length < 0 else description[start:start + length]

        lightness = saturation = 0.0
        mixing = MixAccumulator()
        for token in grammar.token_pattern.split(text):
            if not token:
                continue
            if grammar.numeric_weights and token[0].isdigit():
                mixing.set_last_weight(parse_weight(token))
                continue
            adjective, level = self.classify(token)
            if adjective is not None:
                lightness += adjective.lightness * level * grammar.lightness_step
                saturation += adjective.saturation * level * grammar.saturation_step
            else:
                mixing.add(grammar.table.lookup(token))

        if not mixing:
            return transparent
        result = mixing.mix(transparent, weighted=grammar.weighted)
        if result == transparent:
            return result
        return self.adjust(result, lightness, saturation)

    __call__ = parse


RGB_PARSER: Final = DescriptionParser(SIMPLE_RGB)
IPT_PARSER: Final = DescriptionParser(SIMPLE_IPT)
OKLAB_PARSER: Final = DescriptionParser(BASIC_OKLAB)

PARSERS: Final[Dict[str, DescriptionParser]] = {
    "rgb": RGB_PARSER,
    "ipt": IPT_PARSER,
    "oklab": OKLAB_PARSER,
}


def parse_description(description: Optional[str], start: int = 0, length: int = -1,
                      space: str = "rgb") -> int:
    """
    Parses a description with the stock grammar of ``space``.

    Raises:
        KeyError: If ``space`` is not one of ``"rgb"``, ``"ipt"``, ``"oklab"``.
    """
    return PARSERS[space].parse(description, start, length)
