# -*- coding: utf-8 -*-
"""
Tincture: Describing color in words
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: tincture_packing.py — Packed 32-bit color codec.

Every color handled by Tincture is a single unsigned 32-bit integer holding
four 8-bit channels::

    [alpha:8][ch3:8][ch2:8][ch1:8]

Channel 1 is always the lightness-like channel (red for plain RGB). For the
perceptual spaces the two chromatic channels are stored offset by 127.5, so a
byte of 0x7F or 0x80 reads as (nearly) zero chroma.

Alpha Storage:
    Alpha keeps only its top 7 bits (mask 0xFE), matching the packed-float
    storage of the host graphics framework. ``unpack`` therefore divides alpha
    by 254 so that an encoded 1.0 reads back as exactly 1.0.

All scalar functions here are total on the 32-bit domain: out-of-range
inputs are masked, never rejected.
"""

import functools
from typing import Any, Callable, Final, Tuple

import numpy as np
from numba import njit

__all__ = [
    # --- Masks ---
    "ALPHA_MASK",
    "COLOR_MASK",
    "BYTE",

    # --- Scalar codec ---
    "pack",
    "pack_bytes",
    "unpack",
    "channel",
    "alpha_int",
    "centered",

    # --- Scalar editing ---
    "lerp_colors",
    "lighten",
    "darken",
    "raise_channel",
    "lower_channel",
    "blot",
    "fade",
    "lessen_change",

    # --- Batch ---
    "handle_packed",
    "pack_array",
    "unpack_array",
]

ALPHA_MASK: Final[int] = 0xFE000000
COLOR_MASK: Final[int] = 0x00FFFFFF
BYTE: Final[int] = 0xFF

# 1/254, so the largest storable alpha (0xFE) decodes to 1.0
_INV_ALPHA: Final[float] = 1.0 / 254.0


# =============================================================================
# 1. SCALAR CODEC
# =============================================================================

def pack(ch1: float, ch2: float, ch3: float, alpha: float) -> int:
    """
    Encodes four channels given as 0..1 floats into one packed color.

    Each value is scaled by 255, truncated toward zero and masked into its
    byte. Values outside [0, 1] wrap; that is accepted behavior.

    Args:
        ch1: First channel (lightness, intensity, or red).
        ch2: Second channel, 0..1 (chromatic channels are pre-offset).
        ch3: Third channel, 0..1.
        alpha: Opacity, 0..1. Stored with 7 bits of precision.

    Returns:
        The packed color as a non-negative int.
    """
    return ((int(alpha * 255) << 24 & ALPHA_MASK)
            | (int(ch3 * 255) << 16 & 0xFF0000)
            | (int(ch2 * 255) << 8 & 0xFF00)
            | (int(ch1 * 255) & 0xFF))


def pack_bytes(b1: int, b2: int, b3: int, alpha: int) -> int:
    """Packs four byte values; alpha keeps its top 7 bits."""
    return ((alpha & 0xFE) << 24) | ((b3 & BYTE) << 16) | ((b2 & BYTE) << 8) | (b1 & BYTE)


def unpack(color: int) -> Tuple[float, float, float, float]:
    """
    Inverse of ``pack``: returns the four channels as 0..1 floats.

    Chromatic channels are returned uncentered here; use ``centered`` to map
    a chromatic byte to roughly [-1, 1].
    """
    return ((color & BYTE) / 255.0,
            (color >> 8 & BYTE) / 255.0,
            (color >> 16 & BYTE) / 255.0,
            (color >> 24 & 0xFE) * _INV_ALPHA)


def channel(color: int, index: int) -> int:
    """Returns byte ``index`` (0 = channel 1, 3 = alpha) of ``color``."""
    return color >> (8 * index) & BYTE


def alpha_int(color: int) -> int:
    """Alpha as an even int from 0 to 254."""
    return color >> 24 & 0xFE


def centered(byte: int) -> float:
    """Maps a chromatic byte to roughly [-1, 1], with 127.5 as zero."""
    return (byte - 127.5) / 127.5


# =============================================================================
# 2. SCALAR EDITING PRIMITIVES
# =============================================================================

def lerp_colors(start: int, end: int, change: float) -> int:
    """
    Interpolates every byte of ``start`` toward ``end`` by ``change``.

    Args:
        start: Packed color at ``change == 0``.
        end: Packed color at ``change == 1``.
        change: Interpolation factor, normally 0..1.

    Returns:
        The interpolated packed color; alpha stays even.
    """
    s1, s2, s3, sa = start & BYTE, start >> 8 & BYTE, start >> 16 & BYTE, start >> 24 & 0xFE
    e1, e2, e3, ea = end & BYTE, end >> 8 & BYTE, end >> 16 & BYTE, end >> 24 & 0xFE
    return ((int(s1 + change * (e1 - s1)) & BYTE)
            | ((int(s2 + change * (e2 - s2)) & BYTE) << 8)
            | ((int(s3 + change * (e3 - s3)) & BYTE) << 16)
            | ((int(sa + change * (ea - sa)) & 0xFE) << 24))


def raise_channel(color: int, index: int, change: float) -> int:
    """
    Moves byte ``index`` of ``color`` toward 255 by ``change``.

    Every other byte is kept as-is (alpha keeps only its stored 7 bits).
    """
    shift = 8 * index
    value = color >> shift & BYTE
    other = color & ~(BYTE << shift) & 0xFEFFFFFF
    return ((int(value + (BYTE - value) * change) & BYTE) << shift) | other


def lower_channel(color: int, index: int, change: float) -> int:
    """Moves byte ``index`` of ``color`` toward 0 by ``change``."""
    shift = 8 * index
    value = color >> shift & BYTE
    other = color & ~(BYTE << shift) & 0xFEFFFFFF
    return ((int(value * (1.0 - change)) & BYTE) << shift) | other


def lighten(color: int, change: float) -> int:
    """Interpolates the first channel toward 255; other channels untouched."""
    return raise_channel(color, 0, change)


def darken(color: int, change: float) -> int:
    """Interpolates the first channel toward 0; other channels untouched."""
    return lower_channel(color, 0, change)


def blot(color: int, change: float) -> int:
    """Interpolates alpha toward fully opaque; color channels untouched."""
    opacity = color >> 24 & 0xFE
    return ((int(opacity + (0xFE - opacity) * change) & 0xFE) << 24) | (color & COLOR_MASK)


def fade(color: int, change: float) -> int:
    """Interpolates alpha toward fully transparent; color channels untouched."""
    opacity = color >> 24 & 0xFE
    return ((int(opacity * (1.0 - change)) & 0xFE) << 24) | (color & COLOR_MASK)


def lessen_change(color: int, fraction: float, neutral: int) -> int:
    """
    Blends ``color`` with the ``neutral`` color of its space.

    When ``fraction`` is 1.0 this returns ``color``; at 0.0 it returns
    ``neutral``. Meant for effects that weaken toward their periphery.
    """
    return lerp_colors(neutral, color, fraction)


# =============================================================================
# 3. BATCH CODEC (Numba)
# =============================================================================

def handle_packed(func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator normalising packed-color input to a contiguous 1-D int64 array.

    A scalar packed color (or 0-d array) is promoted to a batch of one and
    the first row of the result is returned, mirroring ``handle_shapes``.
    """
    @functools.wraps(func)
    def wrapper(colors: Any, *args: Any, **kwargs: Any) -> Any:
        arr = np.asarray(colors)
        if arr.ndim > 1:
            raise ValueError(f"Expected a 1-D array of packed colors, got shape {arr.shape}")
        arr_in = np.ascontiguousarray(np.atleast_1d(arr), dtype=np.int64)
        res = func(arr_in, *args, **kwargs)
        if arr.ndim == 0:
            return res[0]
        return res
    return wrapper


@njit(cache=True, fastmath=True)
def _pack_kernel(channels: np.ndarray) -> np.ndarray:
    """(N, 4) floats in 0..1 -> (N,) packed colors, same truncation as ``pack``."""
    n = channels.shape[0]
    out = np.empty(n, dtype=np.int64)
    for i in range(n):
        c1 = np.int64(channels[i, 0] * 255.0) & 0xFF
        c2 = np.int64(channels[i, 1] * 255.0) & 0xFF
        c3 = np.int64(channels[i, 2] * 255.0) & 0xFF
        a = np.int64(channels[i, 3] * 255.0) & 0xFE
        out[i] = (a << 24) | (c3 << 16) | (c2 << 8) | c1
    return out


@njit(cache=True, fastmath=True)
def _unpack_kernel(colors: np.ndarray) -> np.ndarray:
    """(N,) packed colors -> (N, 4) floats, same scaling as ``unpack``."""
    n = colors.shape[0]
    out = np.empty((n, 4), dtype=np.float64)
    for i in range(n):
        c = colors[i]
        out[i, 0] = (c & 0xFF) / 255.0
        out[i, 1] = ((c >> 8) & 0xFF) / 255.0
        out[i, 2] = ((c >> 16) & 0xFF) / 255.0
        out[i, 3] = ((c >> 24) & 0xFE) / 254.0
    return out


def pack_array(channels: np.ndarray) -> np.ndarray:
    """
    Packs an (N, 4) or (4,) float array of channels.

    Raises:
        ValueError: If the last dimension is not 4.
    """
    arr = np.asarray(channels, dtype=np.float64)
    arr_in = np.ascontiguousarray(np.atleast_2d(arr))
    if arr_in.shape[-1] != 4:
        raise ValueError(f"Expected last dimension size 4, got {arr_in.shape[-1]}")
    res = _pack_kernel(arr_in)
    if arr.ndim == 1:
        return res[0]
    return res


@handle_packed
def unpack_array(colors: np.ndarray) -> np.ndarray:
    """Unpacks packed colors into an (N, 4) float array."""
    return _unpack_kernel(colors)
