from __future__ import annotations

import pytest

from qrcodec.pipeline.config import EncodeConfig
from qrcodec.pipeline.pipeline import encode_symbol


@pytest.fixture
def hello_world_symbol():
    """
    "HELLO WORLD" at version 1-Q, the classic alphanumeric example symbol.
    """
    return encode_symbol("HELLO WORLD", cfg=EncodeConfig(level="Q", version=1))


@pytest.fixture
def micro_m1_symbol():
    """
    Five digits fill an M1 symbol exactly (20 data bits).
    """
    return encode_symbol("12345", cfg=EncodeConfig(version=1, micro=True))
