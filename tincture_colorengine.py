# -*- coding: utf-8 -*-
"""
Tincture: Describing color in words
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Packed Color Space Engine
=========================
Conversions between display sRGB and the three packed color spaces Tincture
works in, plus the perceptual descriptors (hue, saturation or chroma,
lightness) each space defines.

Spaces:
    - ``RGBSpace``:   bytes are red, green, blue. Always in gamut.
    - ``IPTSpace``:   intensity, protan, tritan. Linear matrix pipeline.
    - ``OklabSpace``: L, A, B. Cube-root LMS pipeline with gamma 2.0.

Numeric Conventions:
    - Every matrix is stored in single precision (``np.float32``). Scalar
      paths read them back as Python floats, so results do not depend on the
      double-precision upgrade beyond float epsilon.
    - Oklab linearises sRGB by squaring (gamma 2.0) and restores it with a
      square root. This is an approximation of the sRGB EOTF kept for
      compatibility with existing packed values.
    - IPT is the simplified linear form: RGB -> LMS -> IPT by matrix product
      only, without the reference model's power-function nonlinearity.
    - Saturation (RGB, IPT) is the HSL-style max-min spread of reconstructed
      RGB. IPT rebuilds that RGB through ``M_IPT_TO_LMS_DESCRIPTORS``, not the
      gamut inverse. Chroma (Oklab) is the Euclidean norm of A and B. They
      are different metrics and are never mixed.

Architecture Note:
    Scalar methods operate on single packed ``int`` colors in pure Python.
    Batch methods (``to_rgb_array``, ``from_rgb_array``, ``limit_array``)
    dispatch to Numba kernels through ``handle_packed`` / ``handle_shapes``.
"""

import functools
import math
from typing import Any, Callable, ClassVar, Final, List, Optional, Tuple, TypeAlias

import numpy as np
from numba import njit

from tincture_gamut import GamutModel, in_gamut, limit_array, limit_to_gamut
from tincture_packing import (
    ALPHA_MASK,
    BYTE,
    COLOR_MASK,
    blot,
    centered,
    darken,
    fade,
    handle_packed,
    lerp_colors,
    lessen_change,
    lighten,
    lower_channel,
    pack,
    pack_bytes,
    raise_channel,
    unpack_array,
)

__all__ = [
    # --- Type Aliases ---
    "ArrayFloat",

    # --- Configuration ---
    "set_strict_ieee",

    # --- Matrices ---
    "M1_OKLAB",
    "M2_OKLAB",
    "M1_OKLAB_INV",
    "M2_OKLAB_INV",
    "M_RGB_TO_LMS_IPT",
    "M_LMS_TO_IPT",
    "M_IPT_TO_LMS",
    "M_IPT_TO_LMS_DESCRIPTORS",
    "M_RGB_TO_LMS_IPT_8888",
    "M_LMS_TO_RGB_IPT",

    # --- Gamut models ---
    "OKLAB_GAMUT",
    "IPT_GAMUT",

    # --- Decorators ---
    "handle_shapes",

    # --- Functions ---
    "srgb_to_oklab",
    "oklab_to_srgb",
    "hsl_components",
    "hsl_to_rgb",

    # --- Classes ---
    "PackedSpace",
    "RGBSpace",
    "IPTSpace",
    "OklabSpace",
    "SPACES",
]

# --- Type Aliases ---
ArrayFloat: TypeAlias = np.typing.NDArray[np.floating]
RGBA: TypeAlias = Tuple[float, float, float, float]


# --- Oklab Matrices (sRGB oriented) ---
# M1: linear sRGB -> LMS
M1_OKLAB: Final[np.ndarray] = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073969566],
    [0.0883024619, 0.2817188376, 0.6299787005]
], dtype=np.float32)

# M2: cube-rooted LMS' -> Lab
M2_OKLAB: Final[np.ndarray] = np.array([
    [0.2104542553,  0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050,  0.4505937099],
    [0.0259040371,  0.7827717662, -0.8086757660]
], dtype=np.float32)

# Published inverses, not np.linalg.inv: packed values were produced with these.
M2_OKLAB_INV: Final[np.ndarray] = np.array([
    [1.0,  0.3963377774,  0.2158037573],
    [1.0, -0.1055613458, -0.0638541728],
    [1.0, -0.0894841775, -1.2914855480]
], dtype=np.float32)

M1_OKLAB_INV: Final[np.ndarray] = np.array([
    [ 4.0767245293, -3.3072168827,  0.2307590544],
    [-1.2681437731,  2.6093323231, -0.3411344290],
    [-0.0041119885, -0.7034763098,  1.7068625689]
], dtype=np.float32)

# --- IPT Matrices ---
M_RGB_TO_LMS_IPT: Final[np.ndarray] = np.array([
    [0.313921, 0.639468, 0.0465970],
    [0.151693, 0.748209, 0.1000044],
    [0.017700, 0.109400, 0.8729000]
], dtype=np.float32)

M_LMS_TO_IPT: Final[np.ndarray] = np.array([
    [0.4000,  0.4000,  0.2000],
    [4.4550, -4.8510,  0.3960],
    [0.8056,  0.3572, -1.1628]
], dtype=np.float32)

M_IPT_TO_LMS: Final[np.ndarray] = np.array([
    [1.0,  0.097569,  0.205226],
    [1.0, -0.113880,  0.133217],
    [1.0,  0.032615, -0.676890]
], dtype=np.float32)

M_LMS_TO_RGB_IPT: Final[np.ndarray] = np.array([
    [ 5.432622, -4.679100,  0.246257],
    [-1.105170,  2.311198, -0.205880],
    [ 0.028104, -0.194660,  1.166325]
], dtype=np.float32)

# Hue, saturation and lightness of IPT colors reconstruct RGB through this
# softer inverse, not M_IPT_TO_LMS. Stored descriptors depend on it.
M_IPT_TO_LMS_DESCRIPTORS: Final[np.ndarray] = np.array([
    [1.0,  0.06503950,  0.15391950],
    [1.0, -0.07591241,  0.09991275],
    [1.0,  0.02174116, -0.50766750]
], dtype=np.float32)

# RGBA8888 input uses its own S row.
M_RGB_TO_LMS_IPT_8888: Final[np.ndarray] = np.array([
    [0.313921, 0.639468, 0.0465970],
    [0.151693, 0.748209, 0.1000044],
    [0.017753, 0.109468, 0.8729690]
], dtype=np.float32)

# Gray that gamut contraction converges on, per space.
OKLAB_GAMUT: Final[GamutModel] = GamutModel.from_matrices(M2_OKLAB_INV, M1_OKLAB_INV, cube=True, neutral=0.63)
IPT_GAMUT: Final[GamutModel] = GamutModel.from_matrices(M_IPT_TO_LMS, M_LMS_TO_RGB_IPT, cube=False, neutral=0.5)

# Scalar copies for the pure-Python forward paths.
_M1_OK: Final = M1_OKLAB.tolist()
_M2_OK: Final = M2_OKLAB.tolist()
_M_RGB_LMS: Final = M_RGB_TO_LMS_IPT.tolist()
_M_LMS_IPT: Final = M_LMS_TO_IPT.tolist()
_M_RGB_LMS_8888: Final = M_RGB_TO_LMS_IPT_8888.tolist()
_M_IPT_LMS_DESC: Final = M_IPT_TO_LMS_DESCRIPTORS.tolist()
_M_LMS_RGB_IPT: Final = M_LMS_TO_RGB_IPT.tolist()


# --- Runtime Configuration ---
# When True, the continuous sRGB <-> Oklab kernels use fastmath=False
# variants (strict IEEE 754: no reassociation, correct inf/NaN handling).
#
# Toggle at runtime via:
#     import tincture_colorengine as ce
#     ce.set_strict_ieee(True)
_STRICT_IEEE: bool = False


def set_strict_ieee(enabled: bool = True) -> None:
    """
    Toggle between fast (default) and strict IEEE 754 Numba kernels.

    Args:
        enabled: If True, use the strict kernels for ``srgb_to_oklab`` and
            ``oklab_to_srgb``.
    """
    global _STRICT_IEEE
    _STRICT_IEEE = bool(enabled)


# =============================================================================
# 1. DECORATORS
# =============================================================================

def handle_shapes(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
    """
    Decorator to normalize float inputs to (N, 3).

    Args:
        func: The function to decorate.

    Returns:
        The wrapped function with shape handling.
        - If input is (3,), returns the first row of the result
        - If input is (N, 3), returns the full result
    """
    @functools.wraps(func)
    def wrapper(arr: ArrayFloat, *args: Any, **kwargs: Any) -> ArrayFloat:
        arr = np.asarray(arr, dtype=np.float64)
        arr_in = np.ascontiguousarray(np.atleast_2d(arr))

        if arr_in.shape[-1] != 3:
            raise ValueError(f"Expected last dimension size 3, got {arr_in.shape[-1]}")

        res = func(arr_in, *args, **kwargs)

        if arr.ndim == 1:
            return res[0]
        return res
    return wrapper


# =============================================================================
# 2. NUMBA KERNELS
# =============================================================================

@njit(cache=True, fastmath=True)
def _srgb_to_oklab_kernel(rgb: ArrayFloat, m1: ArrayFloat, m2: ArrayFloat) -> ArrayFloat:
    """
    Continuous sRGB -> Oklab with gamma 2.0 (squaring).

    Input shape (N, 3) in [0, 1], output (N, 3) as (L, A, B) with A and B
    centered on zero.
    """
    n = rgb.shape[0]
    out = np.empty_like(rgb)
    for i in range(n):
        r = rgb[i, 0] * rgb[i, 0]
        g = rgb[i, 1] * rgb[i, 1]
        b = rgb[i, 2] * rgb[i, 2]
        l = m1[0, 0] * r + m1[0, 1] * g + m1[0, 2] * b
        m = m1[1, 0] * r + m1[1, 1] * g + m1[1, 2] * b
        s = m1[2, 0] * r + m1[2, 1] * g + m1[2, 2] * b
        l = math.copysign(abs(l) ** (1.0 / 3.0), l)
        m = math.copysign(abs(m) ** (1.0 / 3.0), m)
        s = math.copysign(abs(s) ** (1.0 / 3.0), s)
        for j in range(3):
            out[i, j] = m2[j, 0] * l + m2[j, 1] * m + m2[j, 2] * s
    return out


@njit(cache=True, fastmath=True)
def _oklab_to_srgb_kernel(lab: ArrayFloat, m2_inv: ArrayFloat, m1_inv: ArrayFloat) -> ArrayFloat:
    """Continuous Oklab -> sRGB, clamped to [0, 1] before the square root."""
    n = lab.shape[0]
    out = np.empty_like(lab)
    for i in range(n):
        L, A, B = lab[i, 0], lab[i, 1], lab[i, 2]
        l = m2_inv[0, 0] * L + m2_inv[0, 1] * A + m2_inv[0, 2] * B
        m = m2_inv[1, 0] * L + m2_inv[1, 1] * A + m2_inv[1, 2] * B
        s = m2_inv[2, 0] * L + m2_inv[2, 1] * A + m2_inv[2, 2] * B
        l = l * l * l
        m = m * m * m
        s = s * s * s
        for j in range(3):
            v = m1_inv[j, 0] * l + m1_inv[j, 1] * m + m1_inv[j, 2] * s
            v = min(max(v, 0.0), 1.0)
            out[i, j] = math.sqrt(v)
    return out


# --- Strict IEEE 754 kernel variants (fastmath=False) ---

@njit(cache=True, fastmath=False)
def _srgb_to_oklab_kernel_strict(rgb: ArrayFloat, m1: ArrayFloat, m2: ArrayFloat) -> ArrayFloat:
    """sRGB -> Oklab — strict IEEE 754 variant."""
    n = rgb.shape[0]
    out = np.empty_like(rgb)
    for i in range(n):
        r = rgb[i, 0] * rgb[i, 0]
        g = rgb[i, 1] * rgb[i, 1]
        b = rgb[i, 2] * rgb[i, 2]
        l = m1[0, 0] * r + m1[0, 1] * g + m1[0, 2] * b
        m = m1[1, 0] * r + m1[1, 1] * g + m1[1, 2] * b
        s = m1[2, 0] * r + m1[2, 1] * g + m1[2, 2] * b
        l = math.copysign(abs(l) ** (1.0 / 3.0), l)
        m = math.copysign(abs(m) ** (1.0 / 3.0), m)
        s = math.copysign(abs(s) ** (1.0 / 3.0), s)
        for j in range(3):
            out[i, j] = m2[j, 0] * l + m2[j, 1] * m + m2[j, 2] * s
    return out


@njit(cache=True, fastmath=False)
def _oklab_to_srgb_kernel_strict(lab: ArrayFloat, m2_inv: ArrayFloat, m1_inv: ArrayFloat) -> ArrayFloat:
    """Oklab -> sRGB — strict IEEE 754 variant."""
    n = lab.shape[0]
    out = np.empty_like(lab)
    for i in range(n):
        L, A, B = lab[i, 0], lab[i, 1], lab[i, 2]
        l = m2_inv[0, 0] * L + m2_inv[0, 1] * A + m2_inv[0, 2] * B
        m = m2_inv[1, 0] * L + m2_inv[1, 1] * A + m2_inv[1, 2] * B
        s = m2_inv[2, 0] * L + m2_inv[2, 1] * A + m2_inv[2, 2] * B
        l = l * l * l
        m = m * m * m
        s = s * s * s
        for j in range(3):
            v = m1_inv[j, 0] * l + m1_inv[j, 1] * m + m1_inv[j, 2] * s
            v = min(max(v, 0.0), 1.0)
            out[i, j] = math.sqrt(v)
    return out


@njit(cache=True, fastmath=True)
def _decode_kernel(colors: np.ndarray, to_lms: ArrayFloat, lms_to_rgb: ArrayFloat,
                   cube: bool, root: bool) -> ArrayFloat:
    """
    Packed perceptual colors -> clamped sRGB, shape (N,) -> (N, 3).

    ``cube`` cubes LMS' (Oklab); ``root`` applies the gamma-2.0 square root.
    """
    n = colors.shape[0]
    out = np.empty((n, 3), dtype=np.float64)
    for i in range(n):
        c = colors[i]
        L = (c & 0xFF) / 255.0
        A = (((c >> 8) & 0xFF) - 127.5) / 127.5
        B = (((c >> 16) & 0xFF) - 127.5) / 127.5
        l = to_lms[0, 0] * L + to_lms[0, 1] * A + to_lms[0, 2] * B
        m = to_lms[1, 0] * L + to_lms[1, 1] * A + to_lms[1, 2] * B
        s = to_lms[2, 0] * L + to_lms[2, 1] * A + to_lms[2, 2] * B
        if cube:
            l = l * l * l
            m = m * m * m
            s = s * s * s
        for j in range(3):
            v = lms_to_rgb[j, 0] * l + lms_to_rgb[j, 1] * m + lms_to_rgb[j, 2] * s
            v = min(max(v, 0.0), 1.0)
            if root:
                v = math.sqrt(v)
            out[i, j] = v
    return out


@njit(cache=True, fastmath=True)
def _encode_kernel(rgb: ArrayFloat, to_lms: ArrayFloat, lms_to_lab: ArrayFloat,
                   square: bool, cbrt: bool, l_scale: float, l_bias: float,
                   c_scale: float, c_bias: float) -> np.ndarray:
    """
    sRGB -> opaque packed perceptual colors, shape (N, 3) -> (N,).

    Each channel is scaled, biased, truncated and clamped to a byte.
    """
    n = rgb.shape[0]
    out = np.empty(n, dtype=np.int64)
    for i in range(n):
        r = rgb[i, 0]
        g = rgb[i, 1]
        b = rgb[i, 2]
        if square:
            r = r * r
            g = g * g
            b = b * b
        l = to_lms[0, 0] * r + to_lms[0, 1] * g + to_lms[0, 2] * b
        m = to_lms[1, 0] * r + to_lms[1, 1] * g + to_lms[1, 2] * b
        s = to_lms[2, 0] * r + to_lms[2, 1] * g + to_lms[2, 2] * b
        if cbrt:
            l = math.copysign(abs(l) ** (1.0 / 3.0), l)
            m = math.copysign(abs(m) ** (1.0 / 3.0), m)
            s = math.copysign(abs(s) ** (1.0 / 3.0), s)
        x = lms_to_lab[0, 0] * l + lms_to_lab[0, 1] * m + lms_to_lab[0, 2] * s
        y = lms_to_lab[1, 0] * l + lms_to_lab[1, 1] * m + lms_to_lab[1, 2] * s
        z = lms_to_lab[2, 0] * l + lms_to_lab[2, 1] * m + lms_to_lab[2, 2] * s
        li = min(max(np.int64(x * l_scale + l_bias), 0), 255)
        ai = min(max(np.int64(y * c_scale + c_bias), 0), 255)
        bi = min(max(np.int64(z * c_scale + c_bias), 0), 255)
        out[i] = 0xFE000000 | (bi << 16) | (ai << 8) | li
    return out


def _as64(matrix: np.ndarray) -> ArrayFloat:
    return np.ascontiguousarray(matrix, dtype=np.float64)


@handle_shapes
def srgb_to_oklab(rgb_array: ArrayFloat) -> ArrayFloat:
    """
    Converts sRGB [0..1] to continuous Oklab (A and B centered on zero).

    Args:
        rgb_array: Input sRGB data, shape (N, 3) or (3,). Clipped to [0, 1].

    Returns:
        Oklab coordinates (L, A, B).
    """
    rgb_clipped = np.clip(rgb_array, 0.0, 1.0)
    if _STRICT_IEEE:
        return _srgb_to_oklab_kernel_strict(rgb_clipped, _as64(M1_OKLAB), _as64(M2_OKLAB))
    return _srgb_to_oklab_kernel(rgb_clipped, _as64(M1_OKLAB), _as64(M2_OKLAB))


@handle_shapes
def oklab_to_srgb(lab_array: ArrayFloat) -> ArrayFloat:
    """
    Converts continuous Oklab to sRGB.

    Note: Output is clipped to [0, 1], so out-of-gamut colors are clamped
    per channel rather than contracted toward gray.
    """
    if _STRICT_IEEE:
        return _oklab_to_srgb_kernel_strict(lab_array, _as64(M2_OKLAB_INV), _as64(M1_OKLAB_INV))
    return _oklab_to_srgb_kernel(lab_array, _as64(M2_OKLAB_INV), _as64(M1_OKLAB_INV))


# =============================================================================
# 3. HSL HELPERS
# =============================================================================

def hsl_components(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """
    Hue, saturation and lightness of an RGB triple in [0, 1].

    Saturation is the max-min spread (not HSL's normalised saturation),
    lightness is the HSL midpoint of max and min, and hue is in [0, 1).
    Gray input yields hue 0.
    """
    if g < b:
        x, y, z, w = b, g, -1.0, 2.0 / 3.0
    else:
        x, y, z, w = g, b, 0.0, -1.0 / 3.0
    if r < x:
        z = w
        w = r
    else:
        w = x
        x = r
    d = x - min(w, y)
    hue = abs(z + (w - y) / (6.0 * d + 1e-10))
    lightness = x * (1.0 - 0.5 * d / (x + 1e-10))
    return hue, d, lightness


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> Tuple[float, float, float]:
    """HSL (all in [0, 1], hue wraps) to RGB in [0, 1]."""
    hue -= math.floor(hue)
    x = min(max(abs(hue * 6.0 - 3.0) - 1.0, 0.0), 1.0)
    y = hue + 2.0 / 3.0
    z = hue + 1.0 / 3.0
    y -= int(y)
    z -= int(z)
    y = min(max(abs(y * 6.0 - 3.0) - 1.0, 0.0), 1.0)
    z = min(max(abs(z * 6.0 - 3.0) - 1.0, 0.0), 1.0)
    v = lightness + saturation * min(lightness, 1.0 - lightness)
    d = 2.0 * (1.0 - lightness / (v + 1e-10))
    return (v * (1.0 + (x - 1.0) * d),
            v * (1.0 + (y - 1.0) * d),
            v * (1.0 + (z - 1.0) * d))


def _clamp01(v: float) -> float:
    return 0.0 if v < 0.0 else 1.0 if v > 1.0 else v


def _clamp_byte(v: int) -> int:
    return 0 if v < 0 else 255 if v > 255 else v


# =============================================================================
# 4. PACKED COLOR SPACES
# =============================================================================

class PackedSpace:
    """
    Shared behavior of every packed color space.

    Subclasses fix the meaning of the three channels and provide the
    conversions to and from sRGB. All methods are class-level and pure; a
    space is never instantiated.

    Attributes:
        NAME: Registry key of the space.
        TRANSPARENT: Sentinel returned for "no color".
        NEUTRAL: Opaque mid gray, the target of ``lessen_change``.
        GRAY_THRESHOLD: Colorfulness at or below which a color sorts as gray.
        GAMUT: Reconstruction model for gamut limiting, or None if every
            packed value is displayable.
    """
    NAME: ClassVar[str] = ""
    TRANSPARENT: ClassVar[int] = 0
    NEUTRAL: ClassVar[int] = 0xFE808080
    GRAY_THRESHOLD: ClassVar[float] = 0.05
    GAMUT: ClassVar[Optional[GamutModel]] = None

    # --- Codec ---

    @classmethod
    def encode(cls, ch1: float, ch2: float, ch3: float, alpha: float) -> int:
        """Packs four 0..1 channels; see ``tincture_packing.pack``."""
        return pack(ch1, ch2, ch3, alpha)

    @classmethod
    def decode(cls, color: int) -> RGBA:
        """Returns (ch1, ch2, ch3, alpha) with each channel in 0..1."""
        return ((color & BYTE) / 255.0,
                (color >> 8 & BYTE) / 255.0,
                (color >> 16 & BYTE) / 255.0,
                (color >> 24 & 0xFE) / 254.0)

    @classmethod
    def alpha(cls, color: int) -> float:
        return (color >> 24 & 0xFE) / 254.0

    # --- sRGB adapters ---

    @classmethod
    def to_rgb(cls, color: int) -> RGBA:
        raise NotImplementedError

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float, a: float = 1.0) -> int:
        raise NotImplementedError

    @classmethod
    def to_rgba8888(cls, color: int) -> int:
        """
        Converts to an RGBA8888 int (red in the most significant byte).

        Alpha's missing low bit is filled from its high bit, so 0xFE maps
        to 0xFF.
        """
        r, g, b, _ = cls.to_rgb(color)
        a = color >> 24 & 0xFE
        return ((_clamp_byte(int(r * 255.999)) << 24)
                | (_clamp_byte(int(g * 255.999)) << 16)
                | (_clamp_byte(int(b * 255.999)) << 8)
                | a | a >> 7)

    @classmethod
    def from_rgba8888(cls, rgba: int) -> int:
        """Converts an RGBA8888 int; alpha keeps its top 7 bits."""
        rgba &= 0xFFFFFFFF
        color = cls.from_rgb((rgba >> 24) / 255.0, (rgba >> 16 & BYTE) / 255.0, (rgba >> 8 & BYTE) / 255.0)
        return (color & COLOR_MASK) | ((rgba & 0xFE) << 24)

    @classmethod
    def to_rgb_array(cls, colors: np.ndarray) -> ArrayFloat:
        """Batch ``to_rgb`` without alpha: (N,) packed -> (N, 3) sRGB."""
        raise NotImplementedError

    @classmethod
    def from_rgb_array(cls, rgb: ArrayFloat) -> np.ndarray:
        """Batch ``from_rgb`` for opaque colors: (N, 3) sRGB -> (N,) packed."""
        raise NotImplementedError

    # --- Perceptual descriptors ---

    @classmethod
    def hue(cls, color: int) -> float:
        raise NotImplementedError

    @classmethod
    def lightness(cls, color: int) -> float:
        raise NotImplementedError

    @classmethod
    def colorfulness(cls, color: int) -> float:
        """The space's own distance-from-gray metric (saturation or chroma)."""
        raise NotImplementedError

    # --- Editing ---

    @classmethod
    def lighten(cls, color: int, change: float) -> int:
        return lighten(color, change)

    @classmethod
    def darken(cls, color: int, change: float) -> int:
        return darken(color, change)

    @classmethod
    def enrich(cls, color: int, change: float) -> int:
        raise NotImplementedError

    @classmethod
    def dullen(cls, color: int, change: float) -> int:
        raise NotImplementedError

    @classmethod
    def blot(cls, color: int, change: float) -> int:
        return blot(color, change)

    @classmethod
    def fade(cls, color: int, change: float) -> int:
        return fade(color, change)

    @classmethod
    def lerp(cls, start: int, end: int, change: float) -> int:
        return lerp_colors(start, end, change)

    @classmethod
    def lessen_change(cls, color: int, fraction: float) -> int:
        """Interpolates from this space's neutral gray toward ``color``."""
        return lessen_change(color, fraction, cls.NEUTRAL)

    # --- Gamut ---

    @classmethod
    def in_gamut(cls, color: int) -> bool:
        if cls.GAMUT is None:
            return True
        return in_gamut(color, cls.GAMUT)

    @classmethod
    def limit_to_gamut(cls, color: int) -> int:
        """Contracts ``color`` toward gray until displayable; identity in RGB."""
        if cls.GAMUT is None:
            return color
        return limit_to_gamut(color, cls.GAMUT)

    @classmethod
    def limit_array(cls, colors: np.ndarray) -> np.ndarray:
        if cls.GAMUT is None:
            return np.asarray(colors, dtype=np.int64)
        return limit_array(colors, cls.GAMUT)


class RGBSpace(PackedSpace):
    """
    Plain RGB packed as ``[alpha][blue][green][red]``.

    Lightening and darkening move all three channels together; enriching and
    dullening push the channels away from or toward their luma.
    """
    NAME: ClassVar[str] = "rgb"
    TRANSPARENT: ClassVar[int] = 0
    NEUTRAL: ClassVar[int] = 0xFE808080
    GRAY_THRESHOLD: ClassVar[float] = 0.05

    @classmethod
    def red(cls, color: int) -> float:
        return (color & BYTE) / 255.0

    @classmethod
    def green(cls, color: int) -> float:
        return (color >> 8 & BYTE) / 255.0

    @classmethod
    def blue(cls, color: int) -> float:
        return (color >> 16 & BYTE) / 255.0

    @classmethod
    def to_rgb(cls, color: int) -> RGBA:
        return cls.decode(color)

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float, a: float = 1.0) -> int:
        return pack(r, g, b, a)

    @classmethod
    def from_rgba8888(cls, rgba: int) -> int:
        rgba &= 0xFFFFFFFF
        return pack_bytes(rgba >> 24, rgba >> 16 & BYTE, rgba >> 8 & BYTE, rgba & BYTE)

    @classmethod
    def from_hsl(cls, hue: float, saturation: float, lightness: float, opacity: float = 1.0) -> int:
        return cls.from_rgb(*hsl_to_rgb(hue, saturation, lightness), opacity)

    @classmethod
    def to_rgb_array(cls, colors: np.ndarray) -> ArrayFloat:
        return unpack_array(colors)[..., :3]

    @classmethod
    def from_rgb_array(cls, rgb: ArrayFloat) -> np.ndarray:
        return _rgb_encode(rgb)

    @classmethod
    def hue(cls, color: int) -> float:
        return hsl_components(*cls.decode(color)[:3])[0]

    @classmethod
    def saturation(cls, color: int) -> float:
        return hsl_components(*cls.decode(color)[:3])[1]

    @classmethod
    def lightness(cls, color: int) -> float:
        return hsl_components(*cls.decode(color)[:3])[2]

    @classmethod
    def colorfulness(cls, color: int) -> float:
        return cls.saturation(color)

    @classmethod
    def lighten(cls, color: int, change: float) -> int:
        r, g, b = color & BYTE, color >> 8 & BYTE, color >> 16 & BYTE
        return ((color & ALPHA_MASK)
                | (int(b + (BYTE - b) * change) & BYTE) << 16
                | (int(g + (BYTE - g) * change) & BYTE) << 8
                | (int(r + (BYTE - r) * change) & BYTE))

    @classmethod
    def darken(cls, color: int, change: float) -> int:
        r, g, b = color & BYTE, color >> 8 & BYTE, color >> 16 & BYTE
        keep = 1.0 - change
        return ((color & ALPHA_MASK)
                | (int(b * keep) & BYTE) << 16
                | (int(g * keep) & BYTE) << 8
                | (int(r * keep) & BYTE))

    @classmethod
    def _push_from_luma(cls, color: int, factor: float) -> int:
        r, g, b = color & BYTE, color >> 8 & BYTE, color >> 16 & BYTE
        luma = 0.375 * r + 0.5 * g + 0.125 * b
        return pack_bytes(_clamp_byte(int(luma + (r - luma) * factor)),
                          _clamp_byte(int(luma + (g - luma) * factor)),
                          _clamp_byte(int(luma + (b - luma) * factor)),
                          color >> 24)

    @classmethod
    def enrich(cls, color: int, change: float) -> int:
        return cls._push_from_luma(color, 1.0 + change)

    @classmethod
    def dullen(cls, color: int, change: float) -> int:
        return cls._push_from_luma(color, 1.0 - change)


@njit(cache=True, fastmath=True)
def _rgb_encode_kernel(rgb: ArrayFloat) -> np.ndarray:
    n = rgb.shape[0]
    out = np.empty(n, dtype=np.int64)
    for i in range(n):
        r = np.int64(rgb[i, 0] * 255.0) & 0xFF
        g = np.int64(rgb[i, 1] * 255.0) & 0xFF
        b = np.int64(rgb[i, 2] * 255.0) & 0xFF
        out[i] = 0xFE000000 | (b << 16) | (g << 8) | r
    return out


@handle_shapes
def _rgb_encode(rgb: ArrayFloat) -> np.ndarray:
    return _rgb_encode_kernel(rgb)


class _PerceptualSpace(PackedSpace):
    """
    Spaces whose channels are lightness plus two chroma axes centered on 127.5.
    """
    NEUTRAL: ClassVar[int] = 0xFE808080

    @classmethod
    def decode(cls, color: int) -> RGBA:
        """Returns (lightness, chroma1, chroma2, alpha); chroma in about [-1, 1]."""
        return ((color & BYTE) / 255.0,
                centered(color >> 8 & BYTE),
                centered(color >> 16 & BYTE),
                (color >> 24 & 0xFE) / 254.0)

    @classmethod
    def _raw_rgb(cls, color: int) -> Tuple[float, float, float]:
        L, A, B, _ = cls.decode(color)
        return cls.GAMUT.raw_rgb(L, A, B)

    @classmethod
    def _scale_chroma(cls, color: int, factor: float) -> int:
        a = _clamp_byte(int(((color >> 8 & BYTE) - 127.5) * factor + 127.5))
        b = _clamp_byte(int(((color >> 16 & BYTE) - 127.5) * factor + 127.5))
        return (color & 0xFE0000FF) | (b << 16) | (a << 8)

    @classmethod
    def enrich(cls, color: int, change: float) -> int:
        """
        Pushes both chroma channels away from gray, then limits to gamut.

        If the enriched color stays in gamut only the chroma changes;
        otherwise contraction may also move lightness. Alpha never changes.
        """
        return cls.limit_to_gamut(cls._scale_chroma(color, 1.0 + change))

    @classmethod
    def dullen(cls, color: int, change: float) -> int:
        """Brings both chroma channels toward gray by ``change``."""
        return cls._scale_chroma(color, 1.0 - change)

    @classmethod
    def to_rgb_array(cls, colors: np.ndarray) -> ArrayFloat:
        return _perceptual_decode(colors, cls.GAMUT, cls is OklabSpace)


@handle_packed
def _perceptual_decode(colors: np.ndarray, model: GamutModel, gamma: bool) -> ArrayFloat:
    return _decode_kernel(colors, _as64(model.to_lms), _as64(model.lms_to_rgb), model.cube, gamma)


class IPTSpace(_PerceptualSpace):
    """
    IPT packed as ``[alpha][tritan][protan][intensity]``.

    Protan runs from greenish (low) to reddish (high); tritan from bluish
    (low) to yellowish (high). Hue, saturation and lightness are HSL-style
    values of RGB rebuilt through ``M_IPT_TO_LMS_DESCRIPTORS``.
    """
    NAME: ClassVar[str] = "ipt"
    TRANSPARENT: ClassVar[int] = 0x007F7F00
    NEUTRAL: ClassVar[int] = 0xFE808080
    GRAY_THRESHOLD: ClassVar[float] = 0.05
    GAMUT: ClassVar[Optional[GamutModel]] = IPT_GAMUT

    @classmethod
    def intensity(cls, color: int) -> float:
        return (color & BYTE) / 255.0

    @classmethod
    def protan(cls, color: int) -> float:
        return (color >> 8 & BYTE) / 255.0

    @classmethod
    def tritan(cls, color: int) -> float:
        return (color >> 16 & BYTE) / 255.0

    @classmethod
    def to_rgb(cls, color: int) -> RGBA:
        r, g, b = cls._raw_rgb(color)
        return _clamp01(r), _clamp01(g), _clamp01(b), cls.alpha(color)

    @staticmethod
    def _pack_lms(lms: List[float], alpha_bits: int) -> int:
        i, p, t = (row[0] * lms[0] + row[1] * lms[1] + row[2] * lms[2] for row in _M_LMS_IPT)
        return (alpha_bits
                | _clamp_byte(int(t * 127.5 + 127.5)) << 16
                | _clamp_byte(int(p * 127.5 + 127.5)) << 8
                | _clamp_byte(int(i * 255.0 + 0.5)))

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float, a: float = 1.0) -> int:
        lms = [row[0] * r + row[1] * g + row[2] * b for row in _M_RGB_LMS]
        return cls._pack_lms(lms, int(a * 255) << 24 & ALPHA_MASK)

    @classmethod
    def from_rgba8888(cls, rgba: int) -> int:
        """
        Converts an RGBA8888 int through ``M_RGB_TO_LMS_IPT_8888``.

        Its S row differs slightly from the one ``from_rgb`` uses, so results
        may differ from ``from_rgb`` by one byte step.
        """
        rgba &= 0xFFFFFFFF
        r, g, b = (rgba >> 24) / 255.0, (rgba >> 16 & BYTE) / 255.0, (rgba >> 8 & BYTE) / 255.0
        lms = [row[0] * r + row[1] * g + row[2] * b for row in _M_RGB_LMS_8888]
        return cls._pack_lms(lms, (rgba & 0xFE) << 24)

    @classmethod
    def from_rgb_array(cls, rgb: ArrayFloat) -> np.ndarray:
        return _ipt_encode(rgb)

    @classmethod
    def from_hsl(cls, hue: float, saturation: float, lightness: float, opacity: float = 1.0) -> int:
        """
        IPT color from HSL; lightness at or below 0.001 is always black.
        """
        if lightness <= 0.001:
            return ((int(opacity * 255.0) << 24) & ALPHA_MASK) | 0x7F7F00
        return cls.from_rgb(*hsl_to_rgb(hue, saturation, lightness), opacity)

    @classmethod
    def _descriptor_rgb(cls, color: int) -> Tuple[float, float, float]:
        # Clamped RGB rebuilt through M_IPT_TO_LMS_DESCRIPTORS.
        i, p, t = (color & BYTE) / 255.0, centered(color >> 8 & BYTE), centered(color >> 16 & BYTE)
        lms = [row[0] * i + row[1] * p + row[2] * t for row in _M_IPT_LMS_DESC]
        r, g, b = (row[0] * lms[0] + row[1] * lms[1] + row[2] * lms[2] for row in _M_LMS_RGB_IPT)
        return _clamp01(r), _clamp01(g), _clamp01(b)

    @classmethod
    def hue(cls, color: int) -> float:
        return hsl_components(*cls._descriptor_rgb(color))[0]

    @classmethod
    def saturation(cls, color: int) -> float:
        """
        Max-min spread of the descriptor RGB; 0 near black or white.
        """
        if abs((color & BYTE) / 255.0 - 0.5) > 0.495:
            return 0.0
        return hsl_components(*cls._descriptor_rgb(color))[1]

    @classmethod
    def lightness(cls, color: int) -> float:
        return hsl_components(*cls._descriptor_rgb(color))[2]

    @classmethod
    def colorfulness(cls, color: int) -> float:
        return cls.saturation(color)

    @classmethod
    def protan_up(cls, color: int, change: float) -> int:
        return raise_channel(color, 1, change)

    @classmethod
    def protan_down(cls, color: int, change: float) -> int:
        return lower_channel(color, 1, change)

    @classmethod
    def tritan_up(cls, color: int, change: float) -> int:
        return raise_channel(color, 2, change)

    @classmethod
    def tritan_down(cls, color: int, change: float) -> int:
        return lower_channel(color, 2, change)

    @classmethod
    def inverse_intensity(cls, main: int, contrasting: int) -> int:
        """
        Gives ``main`` an intensity that contrasts with ``contrasting``.

        Chroma and alpha are kept. If the chroma of the two colors already
        differs strongly, ``main`` is returned unchanged. The result never
        lands in the intensity band 0.5..0.55.
        """
        i, p, t = main & BYTE, main >> 8 & BYTE, main >> 16 & BYTE
        ci, cp, ct = contrasting & BYTE, contrasting >> 8 & BYTE, contrasting >> 16 & BYTE
        if (p - cp) * (p - cp) + (t - ct) * (t - ct) >= 0x10000:
            return main
        intensity = i * (0.45 / 255.0) + 0.55 if ci < 128 else 0.5 - i * (0.45 / 255.0)
        return (main & 0xFEFFFF00) | (int(intensity * 255) & BYTE)


@handle_shapes
def _ipt_encode(rgb: ArrayFloat) -> np.ndarray:
    return _encode_kernel(rgb, _as64(M_RGB_TO_LMS_IPT), _as64(M_LMS_TO_IPT),
                          False, False, 255.0, 0.5, 127.5, 127.5)


class OklabSpace(_PerceptualSpace):
    """
    Oklab packed as ``[alpha][B][A][L]``.

    Chroma is the Euclidean norm of A and B; lightness is simply L.
    """
    NAME: ClassVar[str] = "oklab"
    TRANSPARENT: ClassVar[int] = 0x007F7F00
    NEUTRAL: ClassVar[int] = 0xFE7F7F80
    GRAY_THRESHOLD: ClassVar[float] = 1.0 / 64.0
    GAMUT: ClassVar[Optional[GamutModel]] = OKLAB_GAMUT

    @classmethod
    def channel_l(cls, color: int) -> float:
        return (color & BYTE) / 255.0

    @classmethod
    def channel_a(cls, color: int) -> float:
        return (color >> 8 & BYTE) / 255.0

    @classmethod
    def channel_b(cls, color: int) -> float:
        return (color >> 16 & BYTE) / 255.0

    @classmethod
    def to_rgb(cls, color: int) -> RGBA:
        r, g, b = cls._raw_rgb(color)
        return math.sqrt(_clamp01(r)), math.sqrt(_clamp01(g)), math.sqrt(_clamp01(b)), cls.alpha(color)

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float, a: float = 1.0) -> int:
        r, g, b = r * r, g * g, b * b
        lms = [math.copysign(abs(v) ** (1.0 / 3.0), v)
               for v in (row[0] * r + row[1] * g + row[2] * b for row in _M1_OK)]
        L, A, B = (row[0] * lms[0] + row[1] * lms[1] + row[2] * lms[2] for row in _M2_OK)
        return ((int(a * 255) << 24 & ALPHA_MASK)
                | _clamp_byte(int(B * 127.999 + 127.5)) << 16
                | _clamp_byte(int(A * 127.999 + 127.5)) << 8
                | _clamp_byte(int(L * 255.999)))

    @classmethod
    def from_rgb_array(cls, rgb: ArrayFloat) -> np.ndarray:
        return _oklab_encode(rgb)

    @classmethod
    def hue(cls, color: int) -> float:
        """
        Hue angle normalised to [0, 1).

        Chroma bytes of 0x7F and 0x80 both read as zero chroma, giving hue 0.
        """
        a_byte, b_byte = color >> 8 & BYTE, color >> 16 & BYTE
        if a_byte in (0x7F, 0x80) and b_byte in (0x7F, 0x80):
            return 0.0
        a = centered(a_byte)
        b = centered(b_byte)
        turn = math.atan2(b, a) / (2.0 * math.pi)
        return turn + 1.0 if turn < 0.0 else turn

    @classmethod
    def chroma(cls, color: int) -> float:
        return math.hypot(centered(color >> 8 & BYTE), centered(color >> 16 & BYTE))

    @classmethod
    def lightness(cls, color: int) -> float:
        return (color & BYTE) / 255.0

    @classmethod
    def colorfulness(cls, color: int) -> float:
        return cls.chroma(color)

    @classmethod
    def a_up(cls, color: int, change: float) -> int:
        return raise_channel(color, 1, change)

    @classmethod
    def a_down(cls, color: int, change: float) -> int:
        return lower_channel(color, 1, change)

    @classmethod
    def b_up(cls, color: int, change: float) -> int:
        return raise_channel(color, 2, change)

    @classmethod
    def b_down(cls, color: int, change: float) -> int:
        return lower_channel(color, 2, change)


@handle_shapes
def _oklab_encode(rgb: ArrayFloat) -> np.ndarray:
    return _encode_kernel(rgb, _as64(M1_OKLAB), _as64(M2_OKLAB),
                          True, True, 255.999, 0.0, 127.999, 127.5)


SPACES: Final = {space.NAME: space for space in (RGBSpace, IPTSpace, OklabSpace)}


# =============================================================================
# Validation Block
# =============================================================================
if __name__ == "__main__":
    print("--- Tincture Packed Color Engine Validation ---")

    rgb_in = np.random.rand(1000, 3)
    for space in SPACES.values():
        packed = space.from_rgb_array(rgb_in)
        rgb_out = space.to_rgb_array(packed)
        max_err = np.max(np.abs(rgb_in - rgb_out))
        print(f"   {space.NAME:>6}: max round-trip error {max_err:.3e}")

    lab = srgb_to_oklab(rgb_in)
    set_strict_ieee(True)
    lab_strict = srgb_to_oklab(rgb_in)
    set_strict_ieee(False)
    print(f"   Oklab fast vs strict: {np.max(np.abs(lab - lab_strict)):.2e}")
