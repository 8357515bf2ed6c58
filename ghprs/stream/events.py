"""Event stream: the hand-off between a producer thread and its consumer.

A stream merges what would otherwise be an item channel and an error
channel into one ordered sequence of tagged events, terminated by a single
DONE marker. The consumer pulls with next_event() or plain iteration; the
producer pushes with put() and signals completion with close().
"""

import queue
import threading
from dataclasses import dataclass
from typing import Any, Generic, Iterator, TypeVar, Union

from ghprs.stream.errors import FetchError

T = TypeVar("T")

# How often a blocked producer re-checks for cancellation (seconds)
_PUT_POLL_INTERVAL = 0.05


@dataclass(frozen=True)
class ItemEvent(Generic[T]):
    item: T


@dataclass(frozen=True)
class ErrorEvent:
    error: FetchError


class _Done:
    def __repr__(self) -> str:
        return "DONE"


DONE = _Done()

Event = Union[ItemEvent[Any], ErrorEvent, _Done]


class StreamClosedError(RuntimeError):
    """Raised when a producer closes a stream twice."""

    pass


class EventStream(Generic[T]):
    """Single-slot queue of events with close-once and cancel semantics.

    The queue holds at most one event, so a producer runs at most one event
    ahead of its consumer and otherwise blocks in put().
    """

    def __init__(self, name: str = "stream") -> None:
        self.name = name
        self.producer: threading.Thread | None = None
        self._queue: queue.Queue = queue.Queue(maxsize=1)
        self._cancelled = threading.Event()
        self._close_lock = threading.Lock()
        self._closed = False
        self._finished = False

    # Producer side

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def put(self, event: Event) -> bool:
        """Block until the consumer has room for the event.

        Returns False (event dropped) once the stream is cancelled.
        """
        while not self._cancelled.is_set():
            try:
                self._queue.put(event, timeout=_PUT_POLL_INTERVAL)
                return True
            except queue.Full:
                continue
        return False

    def emit(self, item: T) -> bool:
        return self.put(ItemEvent(item))

    def fail(self, error: FetchError) -> bool:
        return self.put(ErrorEvent(error))

    def close(self) -> None:
        """Signal that no further events follow. Allowed exactly once."""
        with self._close_lock:
            if self._closed:
                raise StreamClosedError(f"{self.name} already closed")
            self._closed = True
        self.put(DONE)

    @property
    def closed(self) -> bool:
        return self._closed

    # Consumer side

    def next_event(self, timeout: float | None = None) -> Event:
        """Return the next event, blocking until one is available.

        After DONE has been returned once, every later call returns DONE
        without blocking. Raises queue.Empty if timeout elapses first.
        """
        if self._finished:
            return DONE
        event = self._queue.get(timeout=timeout)
        if event is DONE:
            self._finished = True
        return event

    def __iter__(self) -> Iterator[Union[ItemEvent[T], ErrorEvent]]:
        while True:
            event = self.next_event()
            if event is DONE:
                return
            yield event

    def cancel(self) -> None:
        """Stop consuming: unblock the producer and discard pending events."""
        self._cancelled.set()
        self._finished = True
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the producer thread; True if it has finished."""
        if self.producer is None:
            return True
        self.producer.join(timeout)
        return not self.producer.is_alive()
