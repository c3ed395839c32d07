"""
tincture_packing: scalar codec, editing primitives and batch kernels.
"""
import numpy as np
import pytest

from tincture_packing import (
    blot,
    channel,
    darken,
    fade,
    lerp_colors,
    lessen_change,
    lighten,
    lower_channel,
    pack,
    pack_array,
    pack_bytes,
    raise_channel,
    unpack,
    unpack_array,
)

RED = 0xFE0000FF
BLUE = 0xFEFF0000


class TestCodec:
    def test_pack_layout(self):
        assert pack(1.0, 0.0, 0.0, 1.0) == RED
        assert pack(0.0, 0.0, 1.0, 1.0) == BLUE
        assert pack_bytes(0x12, 0x34, 0x56, 0xFF) == 0xFE563412

    def test_alpha_keeps_top_seven_bits(self):
        assert pack(0.0, 0.0, 0.0, 1.0) >> 24 == 0xFE
        assert unpack(pack(0.0, 0.0, 0.0, 1.0))[3] == 1.0

    def test_round_trip_within_one_step(self, rng):
        for values in rng.uniform(0.0, 1.0, size=(200, 4)):
            decoded = unpack(pack(*values))
            assert np.all(np.abs(np.array(decoded[:3]) - values[:3]) <= 1.0 / 255.0 + 1e-12)
            assert abs(decoded[3] - values[3]) <= 1.0 / 127.0

    def test_reencode_is_stable(self, rng):
        for values in rng.uniform(0.0, 1.0, size=(50, 4)):
            color = pack(*values)
            assert pack_bytes(channel(color, 0), channel(color, 1), channel(color, 2), channel(color, 3)) == color

    def test_out_of_range_wraps_without_error(self):
        assert isinstance(pack(2.0, -1.0, 7.5, 3.0), int)


class TestEditing:
    def test_lerp_midpoint(self):
        assert lerp_colors(RED, BLUE, 0.5) == 0xFE7F007F
        assert lerp_colors(RED, BLUE, 0.0) == RED
        assert lerp_colors(RED, BLUE, 1.0) == BLUE

    def test_lighten_and_darken_touch_first_channel_only(self):
        assert lighten(0xFE123400, 0.5) == 0xFE12347F
        assert darken(0xFE1234FF, 0.5) == 0xFE12347F
        assert lighten(0xFE000000, 1.0) == 0xFE0000FF

    def test_channel_pushers(self):
        assert raise_channel(0xFE000000, 1, 1.0) == 0xFE00FF00
        assert lower_channel(0xFEFFFFFF, 2, 1.0) == 0xFE00FFFF

    def test_blot_and_fade(self):
        assert blot(0x00123456, 1.0) == 0xFE123456
        assert fade(0xFE123456, 1.0) == 0x00123456
        assert blot(0x00123456, 0.0) == 0x00123456

    def test_lessen_change_ends(self):
        gray = 0xFE808080
        assert lessen_change(RED, 1.0, gray) == RED
        assert lessen_change(RED, 0.0, gray) == gray


class TestBatch:
    def test_pack_array_matches_scalar(self, rng):
        values = rng.uniform(0.0, 1.0, size=(32, 4))
        packed = pack_array(values)
        assert packed.shape == (32,)
        assert [int(c) for c in packed] == [pack(*row) for row in values]

    def test_single_row_is_unbatched(self):
        assert int(pack_array(np.array([1.0, 0.0, 0.0, 1.0]))) == RED
        assert unpack_array(RED).shape == (4,)

    def test_unpack_array_matches_scalar(self):
        colors = np.array([RED, BLUE, 0x7F336699], dtype=np.int64)
        np.testing.assert_allclose(unpack_array(colors), np.array([unpack(int(c)) for c in colors]))

    def test_shape_errors(self):
        with pytest.raises(ValueError):
            pack_array(np.zeros((3, 3)))
        with pytest.raises(ValueError):
            unpack_array(np.zeros((2, 2), dtype=np.int64))
