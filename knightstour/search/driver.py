from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from knightstour.core import BOARD_SIZE, Board, Coord, SearchAction
from knightstour.search.channel import ChannelClosed, Tour, TourChannel

logger = logging.getLogger(__name__)


class StopReason(Enum):
    RUNNING = "running"
    EXHAUSTED = "exhausted"
    STOPPED = "stopped"
    MAX_TOURS = "max_tours"
    MAX_ITERATIONS = "max_iterations"
    CHANNEL_CLOSED = "channel_closed"


@dataclass
class SearchConfig:
    board_size: int = BOARD_SIZE
    start: Tuple[int, int] = (0, 0)
    # None keeps searching after each tour until the tree is exhausted.
    max_tours: Optional[int] = None
    max_iterations: Optional[int] = None


@dataclass
class SearchStats:
    iterations: int = 0
    advances: int = 0
    rollbacks: int = 0
    tours_found: int = 0
    deepest: int = 0
    stop_reason: StopReason = StopReason.RUNNING

    def as_dict(self) -> Dict[str, object]:
        return {
            "iterations": self.iterations,
            "advances": self.advances,
            "rollbacks": self.rollbacks,
            "tours_found": self.tours_found,
            "deepest": self.deepest,
            "stop_reason": self.stop_reason.value,
        }


class SearchDriver:
    """Runs the advance/rollback loop over a single board it owns.

    Every closed tour is sent on ``channel`` as ``size * size`` offsets, the
    last of which steps from the final square back onto the start square.
    """

    def __init__(
        self,
        config: SearchConfig = SearchConfig(),
        *,
        channel: Optional[TourChannel] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        if config.max_tours is not None and config.max_tours < 1:
            raise ValueError("max_tours must be at least 1 when set.")
        if config.max_iterations is not None and config.max_iterations < 0:
            raise ValueError("max_iterations must be non-negative when set.")
        self.config = config
        self.board = Board(config.board_size, Coord.from_sequence(config.start))
        self.channel = channel if channel is not None else TourChannel()
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self.stats = SearchStats()
        self.error: Optional[Exception] = None
        self._thread: Optional[threading.Thread] = None

    def step(self) -> SearchAction:
        action = self.board.next_action()
        if action == SearchAction.TERMINATE:
            return action

        self.stats.iterations += 1
        if action == SearchAction.ADVANCE:
            self.board.apply_best_move()
            self.stats.advances += 1
            depth = len(self.board.moves_made)
            if depth > self.stats.deepest:
                self.stats.deepest = depth
            if self.board.is_complete() and self.board.is_closed_tour():
                self._emit(self.board.tour())
        else:
            self.board.retreat()
            self.stats.rollbacks += 1
        return action

    def run(self) -> SearchStats:
        logger.info(
            "Searching %dx%d board from %s",
            self.board.size,
            self.board.size,
            self.board.start.as_tuple(),
        )
        try:
            self.stats.stop_reason = self._loop()
        except ChannelClosed:
            logger.warning("Tour consumer closed the channel; stopping search.")
            self.stats.stop_reason = StopReason.CHANNEL_CLOSED
        logger.info("Search finished: %s", self.stats.as_dict())
        return self.stats

    def start(self) -> threading.Thread:
        if self._thread is not None:
            raise RuntimeError("Search has already been started.")
        self._thread = threading.Thread(target=self._run_in_thread, name="knights-tour-search", daemon=True)
        self._thread.start()
        return self._thread

    def stop(self) -> None:
        self.stop_event.set()

    def join(self, timeout: Optional[float] = None) -> SearchStats:
        if self._thread is None:
            raise RuntimeError("Search has not been started.")
        self._thread.join(timeout)
        if self.error is not None:
            raise self.error
        return self.stats

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _loop(self) -> StopReason:
        max_iterations = self.config.max_iterations
        max_tours = self.config.max_tours
        while True:
            if self.stop_event.is_set():
                return StopReason.STOPPED
            if max_iterations is not None and self.stats.iterations >= max_iterations:
                return StopReason.MAX_ITERATIONS
            if self.step() == SearchAction.TERMINATE:
                return StopReason.EXHAUSTED
            if max_tours is not None and self.stats.tours_found >= max_tours:
                return StopReason.MAX_TOURS

    def _emit(self, tour: Tour) -> None:
        self.channel.send(tour)
        self.stats.tours_found += 1
        logger.debug("Closed tour %d found after %d iterations", self.stats.tours_found, self.stats.iterations)

    def _run_in_thread(self) -> None:
        try:
            self.run()
        except Exception as exc:
            self.error = exc
            logger.exception("Search aborted by a logic fault.")


def find_closed_tours(
    config: SearchConfig = SearchConfig(),
    *,
    stop_event: Optional[threading.Event] = None,
) -> List[Tour]:
    driver = SearchDriver(config, stop_event=stop_event)
    driver.run()
    return driver.channel.drain()
