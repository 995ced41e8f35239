from __future__ import annotations

import queue
import threading
from typing import List, Optional

from knightstour.core import Coord

Tour = List[Coord]


class ChannelClosed(Exception):
    """Raised on send once the receiving side has closed the channel."""


class TourChannel:
    """One-directional channel carrying completed tours to a consumer.

    ``send`` never blocks and ``try_recv`` never waits, so the search loop and
    the consumer can run on separate threads without coordinating.
    """

    def __init__(self) -> None:
        self._queue: "queue.SimpleQueue[Tour]" = queue.SimpleQueue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, tour: Tour) -> None:
        if self._closed.is_set():
            raise ChannelClosed("Tour consumer has closed the channel.")
        self._queue.put(list(tour))

    def try_recv(self) -> Optional[Tour]:
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def drain(self) -> List[Tour]:
        tours: List[Tour] = []
        while True:
            tour = self.try_recv()
            if tour is None:
                return tours
            tours.append(tour)

    def drain_latest(self) -> Optional[Tour]:
        tours = self.drain()
        return tours[-1] if tours else None

    def close(self) -> None:
        self._closed.set()
