"""Full-screen terminal surface built on textual."""

import asyncio
import logging
from typing import Awaitable, Callable, ClassVar, Optional

from textual.app import App, ComposeResult
from textual.events import Key
from textual.widgets import Static

from .events import EventChannel, KeyPressed
from .keys import translate_key
from .renderer import build_view
from .state import AppState

logger = logging.getLogger(__name__)


class SessionView(Static):
    """Focused widget that shows the session and captures every key press."""

    can_focus = True

    def __init__(self, channel: EventChannel, **kwargs):
        super().__init__(**kwargs)
        self.channel = channel

    def on_key(self, event: Key) -> None:
        # Keys never reach textual's own bindings (Tab focus, Ctrl-C copy)
        event.stop()
        event.prevent_default()
        key = translate_key(event.key, event.character)
        if key is not None:
            self.channel.send(KeyPressed(key))


class SessionTerminal(App):
    """Owns the terminal while a session runs.

    Key presses go onto the event channel; the controller runs as a task
    beside the textual app and pushes each new state through ``draw``.
    """

    CSS = """
    #view { width: 100%; height: 100%; }
    """

    ENABLE_COMMAND_PALETTE: ClassVar[bool] = False

    def __init__(
        self,
        channel: EventChannel,
        session: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        super().__init__()
        self.channel = channel
        self.view = SessionView(channel, id="view")
        self._session = session
        self._session_task: Optional[asyncio.Task] = None

    def compose(self) -> ComposeResult:
        yield self.view

    def on_mount(self) -> None:
        self.view.focus()
        if self._session is not None:
            self._session_task = asyncio.create_task(self._drive_session())

    async def _drive_session(self) -> None:
        try:
            await self._session()
        finally:
            self.exit()

    async def run_session(self, session: Callable[[], Awaitable[None]]) -> None:
        """Run until ``session`` returns, re-raising its failure if it had one."""
        self._session = session
        await self.run_async()

        task = self._session_task
        if task is None:
            return
        if not task.done():
            # Ctrl-Q is textual's own quit and ends the app first
            logger.info("Terminal closed before the session finished")
            task.cancel()
            return
        task.result()

    def draw(self, state: AppState) -> None:
        self.view.update(build_view(state))
