"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest
import torch

from reversi.engine import BLACK, EMPTY, WHITE, ReversiGame

CELL_CHARS = {".": EMPTY, "B": BLACK, "W": WHITE}


def board_from_rows(*rows: str) -> np.ndarray:
    """Build a board from up to 8 strings of '.', 'B' and 'W'.

    Missing rows and trailing cells are empty.
    """
    board = np.zeros((8, 8), dtype=np.int8)
    for r, row in enumerate(rows):
        for c, ch in enumerate(row.replace(" ", "")):
            board[r, c] = CELL_CHARS[ch]
    return board


class SleepRecorder:
    """Async stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def make_board():
    return board_from_rows


@pytest.fixture
def game():
    """Fresh game with a seeded RNG."""
    return ReversiGame(rng=np.random.default_rng(42))


@pytest.fixture
def initial_board():
    return ReversiGame().get_board()


@pytest.fixture
def no_sleep():
    return SleepRecorder()


@pytest.fixture
def corner_board():
    """Black to move can take (0, 0) (flips 1) or (4, 0) (flips 4)."""
    return board_from_rows(
        ".WB.....",
        "........",
        "........",
        "........",
        ".WWWWB..",
    )


@pytest.fixture
def full_black_board():
    return np.full((8, 8), BLACK, dtype=np.int8)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit test")
    config.addinivalue_line("markers", "integration: Integration test")
    config.addinivalue_line("markers", "slow: Slow test")


def pytest_collection_modifyitems(config, items):
    """Add markers based on file path."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def reset_torch_threads():
    """Keep PyTorch single-threaded for consistent testing."""
    previous = torch.get_num_threads()
    torch.set_num_threads(1)
    yield
    torch.set_num_threads(previous)
