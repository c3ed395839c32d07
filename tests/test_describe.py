"""
tincture_describe: adjective matching, weights and full description parsing.
"""
from concurrent.futures import ThreadPoolExecutor

import pytest

from palettes import IPT_COLORS, OKLAB_COLORS
from tincture_colorengine import IPTSpace, OklabSpace, RGBSpace
from tincture_describe import (
    BASIC_OKLAB,
    DARK,
    DEEP,
    DULL,
    LIGHT,
    OKLAB_PARSER,
    PALE,
    RGB_PARSER,
    IPT_PARSER,
    PARSERS,
    SIMPLE_RGB,
    WEAK,
    BRIGHT,
    RICH,
    parse_description,
    parse_weight,
)
from tincture_mixing import mix, uneven_mix
from tincture_packing import lerp_colors

RED = 0xFE0000FF
BLUE = 0xFEFF0000


class TestAdjectives:
    @pytest.mark.parametrize("token, adjective, level", [
        ("light", LIGHT, 1), ("lighter", LIGHT, 2), ("lightest", LIGHT, 3), ("lightmost", LIGHT, 4),
        ("Lightest", LIGHT, 3), ("lightxyz", LIGHT, 3),
        ("bright", BRIGHT, 1), ("brightmost", BRIGHT, 4),
        ("pale", PALE, 1), ("paler", PALE, 2), ("palest", PALE, 3), ("palerrr", PALE, 4), ("palemost", PALE, 4),
        ("weak", WEAK, 1), ("weakest", WEAK, 3),
        ("rich", RICH, 1), ("richer", RICH, 2),
        ("dark", DARK, 1), ("darkmost", DARK, 4),
        ("dull", DULL, 1), ("dullest", DULL, 3),
        ("deep", DEEP, 1), ("deeper", DEEP, 2),
    ])
    def test_recognised(self, token, adjective, level):
        assert RGB_PARSER.classify(token) == (adjective, level)

    @pytest.mark.parametrize("token", ["lime", "lights", "blue", "brown", "pear", "rose", "denim", "white", "red"])
    def test_not_adjectives(self, token):
        assert RGB_PARSER.classify(token) == (None, 0)

    def test_basic_vocabulary_is_case_sensitive(self):
        assert OKLAB_PARSER.classify("light") == (LIGHT, 1)
        assert OKLAB_PARSER.classify("Light") == (None, 0)
        assert OKLAB_PARSER.classify("bright") == (None, 0)

    def test_forms(self):
        assert PALE.form(2) == "paler"
        assert PALE.form(3) == "palest"
        assert LIGHT.form(3) == "lightest"
        assert WEAK.form(4) == "weakmost"
        assert DARK.form(1) == "dark"

    def test_compound_lookup(self):
        assert SIMPLE_RGB.compound(1, 1) is BRIGHT
        assert SIMPLE_RGB.compound(-1, 0) is DARK
        assert BASIC_OKLAB.compound(1, 1) is None


class TestWeights:
    @pytest.mark.parametrize("token, weight", [
        ("3", 3.0), ("2.5", 2.5), ("2.", 2.0), ("1e2", 100.0), ("4f", 4.0), ("7D", 7.0),
        ("1.2.3", 1.0), ("3x", 1.0), ("1e", 1.0),
        ("1e999", 1.0), ("9" * 400, 1.0),
    ])
    def test_parse_weight(self, token, weight):
        assert parse_weight(token) == weight


class TestSimpleRGB:
    def test_nothing_recognised(self):
        assert RGB_PARSER.parse("") == 0
        assert RGB_PARSER.parse(None) == 0
        assert RGB_PARSER.parse("xyzzy") == 0
        assert RGB_PARSER.parse("  ,;  ") == 0

    def test_adjectives_alone_are_transparent(self):
        assert RGB_PARSER.parse("light dark") == 0
        assert RGB_PARSER.parse("brightest") == 0

    def test_single_name(self):
        assert RGB_PARSER.parse("red") == RED

    def test_names_are_case_sensitive(self):
        assert RGB_PARSER.parse("Red") == 0

    def test_even_pair(self):
        assert RGB_PARSER.parse("red blue") == 0xFE7F007F

    def test_weighted_pair(self):
        assert RGB_PARSER.parse("red^3 blue") == 0xFE3F00BF
        assert RGB_PARSER.parse("red 3 blue") == 0xFE3F00BF
        assert RGB_PARSER.parse("red^1.0f blue") == RGB_PARSER.parse("red blue")

    def test_overflowing_weight_reads_as_one(self):
        assert RGB_PARSER.parse("red blue 1e999") == RGB_PARSER.parse("red blue")
        assert RGB_PARSER.parse("red blue " + "9" * 400) == RGB_PARSER.parse("red blue")

    def test_weight_before_any_name_is_ignored(self):
        assert RGB_PARSER.parse("3 red blue") == RGB_PARSER.parse("red blue")

    def test_repeated_name_increases_share(self):
        assert RGB_PARSER.parse("red red blue") == mix([RED, RED, BLUE])

    def test_unrecognised_length_falls_back_to_lookup(self):
        assert RGB_PARSER.parse("lights red") == lerp_colors(RGBSpace.TRANSPARENT, RED, 0.5)

    def test_lightness_ladder_is_monotonic(self):
        ladder = [RED] + [RGB_PARSER.parse(f"{word} red")
                          for word in ("light", "lighter", "lightest", "lightmost")]
        lightness = [RGBSpace.lightness(c) for c in ladder]
        assert all(a < b for a, b in zip(lightness, lightness[1:]))

    def test_exact_adjustments(self):
        assert RGB_PARSER.parse("light red") == 0xFE3333FF
        assert RGB_PARSER.parse("dark red") == 0xFE0000CC
        assert RGB_PARSER.parse("dull red") == 0xFE1313DF
        assert RGB_PARSER.parse("bright red") == 0xFE2323FF

    def test_lightness_applies_before_saturation(self):
        assert RGB_PARSER.parse("light dull red") == 0xFE4242E5
        assert RGB_PARSER.parse("pale red") == RGB_PARSER.parse("light dull red")

    def test_adjectives_are_case_insensitive(self):
        assert RGB_PARSER.parse("LIGHT red") == RGB_PARSER.parse("light red")

    def test_deltas_are_clamped(self):
        assert RGB_PARSER.parse("lightmost lightmost red") == 0xFEFFFFFF

    def test_gray_does_not_enrich(self):
        assert RGB_PARSER.parse("rich gray") == 0xFE808080

    def test_sub_range(self):
        assert RGB_PARSER.parse("xx red yy", 3, 3) == RED
        assert RGB_PARSER.parse("red blue", 0, 3) == RED
        assert RGB_PARSER.parse("red blue", 4) == BLUE
        assert RGB_PARSER.parse("red blue", 40, 2) == 0

    def test_parser_is_callable(self):
        assert RGB_PARSER("red") == RED

    def test_concurrent_parsing(self):
        phrases = ["red blue", "darker rich mint sage", "red^3 blue", "pale lime"] * 25
        expected = [RGB_PARSER.parse(p) for p in phrases]
        with ThreadPoolExecutor(max_workers=8) as pool:
            assert list(pool.map(RGB_PARSER.parse, phrases)) == expected


class TestBasicOklab:
    def test_single_name_is_gamut_limited(self):
        red = OKLAB_COLORS["red"]
        assert OKLAB_PARSER.parse("red") == OklabSpace.limit_to_gamut(red)

    def test_even_pair(self):
        expected = OklabSpace.limit_to_gamut(mix([OKLAB_COLORS["red"], OKLAB_COLORS["blue"]]))
        assert OKLAB_PARSER.parse("red blue") == expected

    def test_nothing_recognised(self):
        assert OKLAB_PARSER.parse("") == OklabSpace.TRANSPARENT
        assert OKLAB_PARSER.parse("xyzzy") == OklabSpace.TRANSPARENT
        assert OKLAB_PARSER.parse("light") == OklabSpace.TRANSPARENT

    def test_digits_are_separators(self):
        assert OKLAB_PARSER.parse("red 3 blue") == OKLAB_PARSER.parse("red blue")

    def test_unknown_adjective_is_a_name(self):
        assert OKLAB_PARSER.parse("bright red") == OKLAB_PARSER.parse("transparent red")
        assert OKLAB_PARSER.parse("Light red") != OKLAB_PARSER.parse("light red")

    def test_light_changes_lightness_only_before_limiting(self):
        sage = OKLAB_COLORS["sage"]
        darker = OKLAB_PARSER.parse("darker sage")
        assert darker & 0xFF < sage & 0xFF

    def test_result_is_displayable(self):
        for phrase in ("richmost red", "lightmost richmost green", "dark rich blue"):
            color = OKLAB_PARSER.parse(phrase)
            lightness, a, b, _ = OklabSpace.decode(color)
            rgb = OklabSpace.GAMUT.raw_rgb(lightness, a, b)
            # one byte of repacking slack
            assert min(rgb) >= -0.05 and max(rgb) <= 1.05


class TestSimpleIPT:
    TRANSPARENT = 0x007F7F00

    def test_nothing_recognised(self):
        assert IPTSpace.TRANSPARENT == self.TRANSPARENT
        assert IPT_PARSER.parse("") == self.TRANSPARENT
        assert IPT_PARSER.parse(None) == self.TRANSPARENT
        assert IPT_PARSER.parse("xyzzy") == self.TRANSPARENT
        assert IPT_PARSER.parse("lighter dull") == self.TRANSPARENT

    def test_single_name(self):
        assert IPT_PARSER.parse("gray") == IPT_COLORS["gray"] == 0xFE7F7F80
        assert IPT_PARSER.parse("red") == IPTSpace.limit_to_gamut(IPT_COLORS["red"])

    def test_even_pair(self):
        expected = IPTSpace.limit_to_gamut(mix([IPT_COLORS["red"], IPT_COLORS["blue"]]))
        assert IPT_PARSER.parse("red blue") == expected

    def test_weighted_pair(self):
        entries = [(IPT_COLORS["red"], 3.0), (IPT_COLORS["blue"], 1.0)]
        expected = IPTSpace.limit_to_gamut(uneven_mix(entries))
        assert IPT_PARSER.parse("red^3 blue") == expected
        assert IPT_PARSER.parse("red 3 blue") == expected
        assert IPT_PARSER.parse("red^3 blue") != IPT_PARSER.parse("red blue")

    def test_lightness_ladder_raises_intensity(self):
        words = ("darkmost", "darkest", "darker", "dark", "", "light", "lighter", "lightest", "lightmost")
        ladder = [IPT_PARSER.parse(f"{word} gray") for word in words]
        intensity = [IPTSpace.intensity(c) for c in ladder]
        assert all(a < b for a, b in zip(intensity, intensity[1:]))
        assert ladder[4] == IPT_COLORS["gray"]

    def test_saturation_adjectives(self):
        sage = IPT_COLORS["sage"]
        assert IPTSpace.saturation(IPT_PARSER.parse("dullest sage")) < IPTSpace.saturation(sage)
        assert IPT_PARSER.parse("dull sage") & 0xFF == sage & 0xFF

    def test_adjectives_are_case_insensitive(self):
        assert IPT_PARSER.parse("LIGHTER Rich sage") == IPT_PARSER.parse("lighter rich sage")

    def test_results_stay_displayable(self):
        for phrase in ("richmost red", "brightest blue", "deepest lime", "red^3 blue"):
            color = IPT_PARSER.parse(phrase)
            i, p, t, _ = IPTSpace.decode(color)
            rgb = IPTSpace.GAMUT.raw_rgb(i, p, t)
            assert min(rgb) >= -0.05 and max(rgb) <= 1.05


class TestNeverRaises:
    @pytest.mark.parametrize("space", sorted(PARSERS))
    @pytest.mark.parametrize("text", [
        "red 1e999", "red " + "9" * 400, "red 1e-999 blue", "red 0 blue", "red 0.0e0 blue",
        "red ... blue", "red 1..2 blue", "red 1e+ blue", "red 3f4 blue", "1e999 red 1e999 blue 1e999",
        "red_blue", "\u00e9carlate red", "\x00\x01", " " * 50, "lightmostlightmost", "^^^",
    ])
    def test_any_text_gives_a_packed_color(self, space, text):
        color = PARSERS[space].parse(text)
        assert isinstance(color, int)
        assert 0 <= color < 2 ** 32


class TestRegistry:
    def test_parse_description_dispatch(self):
        assert parse_description("red") == RED
        assert parse_description("red", space="oklab") == OKLAB_PARSER.parse("red")
        assert parse_description("red", space="ipt") == IPTSpace.limit_to_gamut(IPT_COLORS["red"])

    def test_unknown_space(self):
        with pytest.raises(KeyError):
            parse_description("red", space="hsv")
