# -*- coding: utf-8 -*-
"""
Tincture: Describing color in words
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: tincture_gamut.py — Gray-ward gamut limiting for perceptual colors.

Arithmetic in a perceptual space (lightening, enriching, mixing) can land on
coordinates whose reconstructed RGB leaves the [0, 1] cube. The limiter here
walks such a color toward neutral gray in 32 fixed steps and keeps the first
candidate that reconstructs inside the cube.

Search Order:
    Candidates are tried from least contracted (the color itself) to most
    contracted (pure neutral gray)::

        candidate(k) = lerp(gray, color, k / 32)    for k = 32, 31, ..., 0

    The first in-gamut candidate wins, which keeps the original look whenever
    possible. If not even gray passes, the last computed candidate is
    returned regardless.

A space participates through a ``GamutModel``: the inverse matrices that map
its packed channels back to linear RGB, whether LMS is cubed in between
(Oklab) or not (IPT), and the lightness of its neutral gray.
"""

from dataclasses import dataclass
from typing import Final, Tuple, TypeAlias

import numpy as np
from numba import njit

from tincture_packing import ALPHA_MASK, BYTE, centered, handle_packed

__all__ = [
    "ATTEMPTS",
    "GamutModel",
    "limit_to_gamut",
    "in_gamut",
    "limit_array",
]

ATTEMPTS: Final[int] = 32

Matrix3: TypeAlias = Tuple[Tuple[float, float, float], ...]


@dataclass(slots=True, frozen=True)
class GamutModel:
    """
    Reconstruction of linear RGB from packed perceptual channels.

    Matrices are held as nested tuples of Python floats so the scalar limiter
    runs without NumPy overhead; the batch kernel rebuilds arrays from them.

    Attributes:
        to_lms: 3x3 matrix, (lightness, chroma1, chroma2) -> LMS (or LMS').
        lms_to_rgb: 3x3 matrix, LMS -> linear RGB.
        cube: If True, LMS' is cubed before ``lms_to_rgb`` (Oklab).
        neutral: Lightness of the gray that contraction converges on.
    """
    to_lms: Matrix3
    lms_to_rgb: Matrix3
    cube: bool
    neutral: float

    @classmethod
    def from_matrices(cls, to_lms: np.ndarray, lms_to_rgb: np.ndarray,
                      cube: bool, neutral: float) -> "GamutModel":
        """Builds a model from two (3, 3) arrays, keeping their stored precision."""
        return cls(tuple(tuple(row) for row in np.asarray(to_lms).tolist()),
                   tuple(tuple(row) for row in np.asarray(lms_to_rgb).tolist()),
                   bool(cube), float(neutral))

    def raw_rgb(self, lightness: float, c1: float, c2: float) -> Tuple[float, float, float]:
        """Unclamped linear RGB for centered channel values."""
        to_lms, lms_to_rgb = self.to_lms, self.lms_to_rgb
        l = to_lms[0][0] * lightness + to_lms[0][1] * c1 + to_lms[0][2] * c2
        m = to_lms[1][0] * lightness + to_lms[1][1] * c1 + to_lms[1][2] * c2
        s = to_lms[2][0] * lightness + to_lms[2][1] * c1 + to_lms[2][2] * c2
        if self.cube:
            l, m, s = l * l * l, m * m * m, s * s * s
        return (lms_to_rgb[0][0] * l + lms_to_rgb[0][1] * m + lms_to_rgb[0][2] * s,
                lms_to_rgb[1][0] * l + lms_to_rgb[1][1] * m + lms_to_rgb[1][2] * s,
                lms_to_rgb[2][0] * l + lms_to_rgb[2][1] * m + lms_to_rgb[2][2] * s)


def _inside(r: float, g: float, b: float) -> bool:
    return 0.0 <= r <= 1.0 and 0.0 <= g <= 1.0 and 0.0 <= b <= 1.0


def in_gamut(color: int, model: GamutModel) -> bool:
    """True if ``color`` reconstructs to RGB inside [0, 1] on every channel."""
    return _inside(*model.raw_rgb((color & BYTE) / 255.0,
                                  centered(color >> 8 & BYTE),
                                  centered(color >> 16 & BYTE)))


def limit_to_gamut(color: int, model: GamutModel) -> int:
    """
    Brings a packed perceptual color back inside the sRGB gamut.

    Args:
        color: Packed color in the space described by ``model``.
        model: Reconstruction matrices and neutral lightness of that space.

    Returns:
        The first candidate between ``color`` and neutral gray that is in
        gamut, repacked with the original alpha. Idempotent on in-gamut input.
    """
    L = (color & BYTE) / 255.0
    A = centered(color >> 8 & BYTE)
    B = centered(color >> 16 & BYTE)
    L2, A2, B2 = L, A, B
    for attempt in range(ATTEMPTS - 1, -1, -1):
        if _inside(*model.raw_rgb(L2, A2, B2)):
            break
        progress = attempt / ATTEMPTS
        L2 = model.neutral + (L - model.neutral) * progress
        A2 = A * progress
        B2 = B * progress
    return ((color & ALPHA_MASK)
            | (int(B2 * 127.999 + 128.0) << 16)
            | (int(A2 * 127.999 + 128.0) << 8)
            | int(L2 * 255.999))


# =============================================================================
# BATCH LIMITER (Numba)
# =============================================================================

@njit(cache=True, fastmath=True)
def _limit_kernel(colors: np.ndarray, to_lms: np.ndarray, lms_to_rgb: np.ndarray,
                  cube: bool, neutral: float) -> np.ndarray:
    """Applies the 32-step contraction to every color in a 1-D batch."""
    n = colors.shape[0]
    out = np.empty(n, dtype=np.int64)
    for i in range(n):
        c = colors[i]
        L = (c & 0xFF) / 255.0
        A = (((c >> 8) & 0xFF) - 127.5) / 127.5
        B = (((c >> 16) & 0xFF) - 127.5) / 127.5
        L2 = L
        A2 = A
        B2 = B
        for attempt in range(31, -1, -1):
            l = to_lms[0, 0] * L2 + to_lms[0, 1] * A2 + to_lms[0, 2] * B2
            m = to_lms[1, 0] * L2 + to_lms[1, 1] * A2 + to_lms[1, 2] * B2
            s = to_lms[2, 0] * L2 + to_lms[2, 1] * A2 + to_lms[2, 2] * B2
            if cube:
                l = l * l * l
                m = m * m * m
                s = s * s * s
            r = lms_to_rgb[0, 0] * l + lms_to_rgb[0, 1] * m + lms_to_rgb[0, 2] * s
            g = lms_to_rgb[1, 0] * l + lms_to_rgb[1, 1] * m + lms_to_rgb[1, 2] * s
            b = lms_to_rgb[2, 0] * l + lms_to_rgb[2, 1] * m + lms_to_rgb[2, 2] * s
            if r >= 0.0 and r <= 1.0 and g >= 0.0 and g <= 1.0 and b >= 0.0 and b <= 1.0:
                break
            progress = attempt / 32.0
            L2 = neutral + (L - neutral) * progress
            A2 = A * progress
            B2 = B * progress
        out[i] = ((c & 0xFE000000)
                  | (np.int64(B2 * 127.999 + 128.0) << 16)
                  | (np.int64(A2 * 127.999 + 128.0) << 8)
                  | np.int64(L2 * 255.999))
    return out


@handle_packed
def limit_array(colors: np.ndarray, model: GamutModel) -> np.ndarray:
    """Batch form of ``limit_to_gamut`` over a 1-D array of packed colors."""
    return _limit_kernel(colors,
                         np.ascontiguousarray(model.to_lms, dtype=np.float64),
                         np.ascontiguousarray(model.lms_to_rgb, dtype=np.float64),
                         model.cube, float(model.neutral))
