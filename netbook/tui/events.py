"""Application events and the channel that carries them to the controller."""

import asyncio
from dataclasses import dataclass
from typing import Optional, Union

from ..models import ExecutionResult
from .keys import KeyEvent


@dataclass(frozen=True)
class KeyPressed:
    key: KeyEvent


@dataclass(frozen=True)
class ExecutionStarted:
    request_name: str


@dataclass(frozen=True)
class ExecutionCompleted:
    request_name: str
    response: ExecutionResult


@dataclass(frozen=True)
class ExecutionFailed:
    request_name: str
    error: str


@dataclass(frozen=True)
class QuitRequested:
    pass


AppEvent = Union[
    KeyPressed, ExecutionStarted, ExecutionCompleted, ExecutionFailed, QuitRequested
]


class EventChannel:
    """Many-producer, single-consumer queue of application events.

    Events are delivered in the order they were sent. ``send`` may be called
    from any thread; ``next`` is awaited by the controller only.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop or asyncio.get_running_loop()
        self._queue: "asyncio.Queue[AppEvent]" = asyncio.Queue()

    def send(self, event: AppEvent) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            self._queue.put_nowait(event)
        else:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, event)

    async def next(self) -> AppEvent:
        return await self._queue.get()

    def pending(self) -> int:
        return self._queue.qsize()
