"""Shared fixtures: fixed random seed, sample colors, IEEE mode reset."""

from typing import Iterator

import numpy as np
import pytest

import tincture_colorengine as ce

RED = 0xFE0000FF
BLUE = 0xFEFF0000


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    np.random.seed(12345)


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(2026)


@pytest.fixture()
def strict_ieee() -> Iterator[None]:
    ce.set_strict_ieee(True)
    yield
    ce.set_strict_ieee(False)


@pytest.fixture()
def rgb_samples(rng: np.random.Generator) -> np.ndarray:
    """Mid-range sRGB triples, away from black where gamma 2.0 amplifies rounding."""
    return rng.uniform(0.2, 0.95, size=(64, 3))
