"""Ultimate CPU: scores moves with a learned model, falls back to Hard.

The model is loaded in the background by ModelLoader, an explicit state
machine (IDLE -> LOADING -> LOADED, or LOADING -> FAILED for good) driven
by a single asyncio task. Until the model is ready, and whenever inference
fails or yields nothing usable, moves come from the Hard strategy.
"""

import asyncio
from enum import Enum
from functools import partial
from typing import Any, Awaitable, Callable, List, Optional

import numpy as np
import torch

from ..config import ModelConfig, settings
from ..engine.constants import BOARD_SIZE, EMPTY, Position, opponent
from ..model.network import load_predictor
from ..utils.debug_logger import Logger, NoOpLogger
from .base import CPULevel, CPUStrategy
from .hard import hard_choice

Predictor = Callable[[np.ndarray], Any]


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


def encode_board(board: np.ndarray, player: int) -> np.ndarray:
    """Encode a board as a (1, 8, 8, 3) float32 array from player's view."""
    board = np.asarray(board)
    planes = np.zeros((1, BOARD_SIZE, BOARD_SIZE, 3), dtype=np.float32)
    planes[0, :, :, 0] = board == player
    planes[0, :, :, 1] = board == opponent(player)
    planes[0, :, :, 2] = board == EMPTY
    return planes


def first_output(outputs: Any) -> np.ndarray:
    """Flatten the first output of a predictor into a 1-D score vector."""
    if isinstance(outputs, (list, tuple)):
        if not outputs:
            raise ValueError("Model returned no outputs")
        outputs = outputs[0]
    if isinstance(outputs, torch.Tensor):
        outputs = outputs.detach().cpu().numpy()
    return np.asarray(outputs, dtype=np.float64).reshape(-1)


def pick_best(scores: np.ndarray, valid_moves: List[Position]) -> Optional[Position]:
    """Return the legal move with the highest usable score, if any.

    Missing, NaN and -inf scores are skipped. Ties go to the earliest move.
    """
    best_move, best_score = None, None
    for move in valid_moves:
        index = move[0] * BOARD_SIZE + move[1]
        if index >= scores.size:
            continue
        score = scores[index]
        if np.isnan(score) or score == -np.inf:
            continue
        if best_score is None or score > best_score:
            best_move, best_score = move, score
    return best_move


class ModelLoader:
    """Loads a predictor with bounded retries and exponential backoff."""

    def __init__(
        self,
        load_fn: Callable[[], Predictor],
        config: Optional[ModelConfig] = None,
        logger: Optional[Logger] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.load_fn = load_fn
        self.config = config or settings.MODEL
        self.logger = logger or NoOpLogger()
        self._sleep = sleep

        self.state = LoadState.IDLE
        self.attempts = 0
        self.predictor: Optional[Predictor] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_ready(self) -> bool:
        return self.state == LoadState.LOADED

    @property
    def is_loading(self) -> bool:
        return self.state == LoadState.LOADING

    @property
    def has_failed(self) -> bool:
        return self.state == LoadState.FAILED

    def ensure_started(self) -> Optional[asyncio.Task]:
        """Start loading unless a load is running or already finished.

        Must be called from a running event loop.
        """
        if self.state in (LoadState.LOADED, LoadState.FAILED):
            return self._task
        if self._task is not None and not self._task.done():
            return self._task

        self.state = LoadState.LOADING
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    async def wait(self) -> bool:
        """Wait for the current load to finish and report readiness."""
        if self._task is not None:
            await self._task
        return self.is_ready

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            self.state = LoadState.IDLE

    async def _run(self) -> None:
        max_attempts = self.config.max_load_attempts
        while self.attempts < max_attempts:
            self.attempts += 1
            self.logger.debug(f"Loading model (attempt {self.attempts}/{max_attempts})")
            try:
                predictor = await asyncio.to_thread(self._load_and_warm_up)
            except Exception as e:
                self.logger.debug(f"Model load attempt {self.attempts} failed: {e!r}")
                if self.attempts >= max_attempts:
                    break
                delay = self.config.backoff_delay(self.attempts)
                self.logger.debug(f"Retrying model load in {delay:.2f}s")
                await self._sleep(delay)
                continue

            self.predictor = predictor
            self.state = LoadState.LOADED
            self.logger.debug("Model loaded")
            return

        self.state = LoadState.FAILED
        self.logger.debug(f"Model unavailable after {self.attempts} attempts, Hard strategy from now on")

    def _load_and_warm_up(self) -> Predictor:
        predictor = self.load_fn()
        predictor(np.zeros((1, BOARD_SIZE, BOARD_SIZE, 3), dtype=np.float32))
        return predictor


def _loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class UltimateStrategy(CPUStrategy):
    """Picks the legal move the model scores highest.

    Falls back to the Hard strategy, without raising, when the model is not
    loaded, has permanently failed to load, raises during inference or
    gives no usable score for any legal move.
    """

    level = CPULevel.ULTIMATE

    def __init__(
        self,
        loader: Optional[ModelLoader] = None,
        model_config: Optional[ModelConfig] = None,
        logger: Optional[Logger] = None,
    ):
        self.model_config = model_config or settings.MODEL
        self.logger = logger or NoOpLogger()
        self.loader = loader or ModelLoader(
            partial(load_predictor, self.model_config.model_path),
            config=self.model_config,
            logger=self.logger,
        )
        # Without a running loop the load starts on the first select_move
        if _loop_running():
            self.loader.ensure_started()

    def is_model_ready(self) -> bool:
        return self.loader.is_ready

    def is_model_loading(self) -> bool:
        return self.loader.is_loading

    def has_model_load_failed(self) -> bool:
        return self.loader.has_failed

    async def select_from(
        self, board: np.ndarray, current_player: int, valid_moves: List[Position]
    ) -> Position:
        if not self.loader.is_ready:
            if not self.loader.has_failed:
                self.loader.ensure_started()
            return self._fallback(board, current_player, valid_moves, f"model {self.loader.state.value}")

        try:
            scores = await asyncio.to_thread(self._predict_scores, board, current_player)
        except Exception as e:
            return self._fallback(board, current_player, valid_moves, f"inference failed: {e!r}")

        move = pick_best(scores, valid_moves)
        if move is None:
            return self._fallback(board, current_player, valid_moves, "no usable scores")
        return move

    def _predict_scores(self, board: np.ndarray, current_player: int) -> np.ndarray:
        return first_output(self.loader.predictor(encode_board(board, current_player)))

    def _fallback(
        self, board: np.ndarray, current_player: int, valid_moves: List[Position], reason: str
    ) -> Position:
        self.logger.debug(f"Ultimate CPU using Hard strategy: {reason}")
        return hard_choice(board, current_player, valid_moves)
