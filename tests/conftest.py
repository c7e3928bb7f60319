import numpy as np
import pytest

from audiovis.config import RenderConfig
from audiovis.surface import RecordingSurface


@pytest.fixture
def surface():
    return RecordingSurface(400, 300)


@pytest.fixture
def make_config():
    def _make(**kwargs):
        return RenderConfig(**kwargs)

    return _make


def flat_frame(value, length=1024):
    return np.full(length, value, dtype=np.uint8)
