from __future__ import annotations

import pytest

from picture_puzzle.game import generate_puzzle_pattern


@pytest.fixture
def pattern_6x6():
    return generate_puzzle_pattern(6, 12345)
