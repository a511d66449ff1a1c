from __future__ import annotations

import numpy as np
import pytest

from roi_stack.models import Volume

TEST_IMAGE_WIDTH = 100
TEST_IMAGE_HEIGHT = 100
TEST_IMAGE_DEPTH = 4


@pytest.fixture
def volume() -> Volume:
    data = np.zeros((TEST_IMAGE_DEPTH, TEST_IMAGE_HEIGHT, TEST_IMAGE_WIDTH), dtype=np.uint8)
    return Volume(data)


@pytest.fixture
def ramp_volume() -> Volume:
    """Depth 4, 10x12 planes; pixel value = 100 * plane + 10 * y + x (mod 256)."""
    z, y, x = np.meshgrid(np.arange(1, 5), np.arange(10), np.arange(12), indexing="ij")
    data = ((100 * z + 10 * y + x) % 256).astype(np.uint8)
    return Volume(data, labels=[f"slice{i}" for i in range(1, 5)])
