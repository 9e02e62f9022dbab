"""Shared fixtures."""

from __future__ import annotations

import pytest

from hyper4d.config import KernelConfig
from hyper4d.integrator import FrameState
from hyper4d.shapes import Shape4D


@pytest.fixture()
def tesseract() -> Shape4D:
    return Shape4D.tesseract(2.0)


@pytest.fixture()
def config() -> KernelConfig:
    return KernelConfig()


@pytest.fixture()
def state(config: KernelConfig) -> FrameState:
    return FrameState.initial(config)
