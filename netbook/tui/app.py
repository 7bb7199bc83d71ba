"""Interactive controller: the event loop that owns the session state."""

import asyncio
import copy
import logging
from contextlib import nullcontext
from pathlib import Path
from typing import Optional, Set

from ..config import Settings
from ..core.errors import EditDecodeFailure, EditorFailure, PersistenceFailure
from ..core.executor import RequestExecutor
from ..core.interpolation import VariableInterpolator
from ..models import RequestTemplate
from ..plugins import create_plugin_manager
from ..storage import find_request
from .editor import RequestEditor
from .events import (
    AppEvent,
    EventChannel,
    ExecutionCompleted,
    ExecutionFailed,
    ExecutionStarted,
    KeyPressed,
    QuitRequested,
)
from .keys import KeyCode, KeyEvent
from .state import AppMode, AppState
from .terminal import SessionTerminal

logger = logging.getLogger(__name__)


async def run_execution(
    executor: RequestExecutor,
    request: RequestTemplate,
    interpolator: VariableInterpolator,
    channel: EventChannel,
) -> None:
    """Background task: execute one request and report back on the channel."""
    channel.send(ExecutionStarted(request.name))
    try:
        response = await executor.execute_with_error_handling(request, interpolator)
    except Exception as e:
        logger.error(f"Execution of '{request.name}' failed: {e}", exc_info=True)
        channel.send(ExecutionFailed(request.name, str(e)))
        return
    channel.send(ExecutionCompleted(request.name, response))


class TuiApp:
    """Single owner of AppState.

    Renders, waits for the next event, applies it, and repeats. Key presses
    and execution results arrive on one channel and are handled strictly in
    arrival order. HTTP calls run as separate tasks and only report back.
    """

    def __init__(
        self,
        state: AppState,
        executor: RequestExecutor,
        channel: EventChannel,
        editor: Optional[RequestEditor] = None,
        terminal: Optional[SessionTerminal] = None,
    ):
        self.state = state
        self.executor = executor
        self.channel = channel
        self.editor = editor or RequestEditor()
        self.terminal = terminal
        self._tasks: Set[asyncio.Task] = set()

    @classmethod
    def create(cls, collection_path: Path, settings: Settings) -> "TuiApp":
        """Wire up a full interactive session. Must run inside the event loop."""
        state = AppState.load(collection_path, settings)
        executor = RequestExecutor(
            timeout=settings.request_timeout,
            plugin_manager=create_plugin_manager(settings),
            max_redirects=settings.max_redirects,
        )
        channel = EventChannel()
        return cls(
            state,
            executor,
            channel,
            editor=RequestEditor(settings.editor),
            terminal=SessionTerminal(channel),
        )

    async def run(self) -> None:
        """Take over the terminal and run until the user quits."""
        try:
            await self.terminal.run_session(self.run_loop)
        finally:
            if self._tasks:
                # Outstanding executions are left to finish on their own
                logger.info(f"Quitting with {len(self._tasks)} request(s) in flight")
            else:
                await self.executor.aclose()

    async def run_loop(self) -> None:
        while not self.state.should_quit:
            if self.terminal is not None:
                self.terminal.draw(self.state)
            event = await self.channel.next()
            await self.handle_event(event)

    async def handle_event(self, event: AppEvent) -> None:
        state = self.state
        if isinstance(event, KeyPressed):
            await self.handle_key(event.key)
        elif isinstance(event, ExecutionStarted):
            state.mark_executing(event.request_name)
        elif isinstance(event, ExecutionCompleted):
            state.apply_completed(event.request_name, event.response)
        elif isinstance(event, ExecutionFailed):
            state.apply_failed(event.error)
        elif isinstance(event, QuitRequested):
            state.should_quit = True

    async def handle_key(self, key: KeyEvent) -> None:
        mode = self.state.mode
        if mode is AppMode.NORMAL:
            await self._handle_normal_key(key)
        elif mode is AppMode.FILTER:
            self._handle_filter_key(key)
        elif mode is AppMode.VARIABLES:
            self._handle_variables_key(key)
        elif mode is AppMode.HISTORY:
            self._handle_history_key(key)
        elif mode is AppMode.COMMAND:
            await self._handle_command_key(key)

    async def _handle_normal_key(self, key: KeyEvent) -> None:
        state = self.state
        if key.is_char('q') or (key.char == 'c' and key.ctrl):
            state.should_quit = True
        elif key.code is KeyCode.UP or key.is_char('k'):
            state.move_selection_up()
        elif key.code is KeyCode.DOWN or key.is_char('j'):
            state.move_selection_down()
        elif key.code is KeyCode.ENTER:
            self.execute_current_request()
        elif key.is_char('/'):
            state.mode = AppMode.FILTER
            state.update_filter("")
        elif key.is_char('v'):
            state.mode = AppMode.VARIABLES
        elif key.is_char('h'):
            state.enter_history()
        elif key.is_char(':'):
            state.mode = AppMode.COMMAND
        elif key.is_char('e'):
            await self.edit_current_request()
        elif key.code is KeyCode.TAB:
            state.next_response_tab()
        elif key.code is KeyCode.BACKTAB:
            state.previous_response_tab()

    def _handle_filter_key(self, key: KeyEvent) -> None:
        state = self.state
        if key.code is KeyCode.ENTER:
            state.mode = AppMode.NORMAL
        elif key.code is KeyCode.ESC:
            state.mode = AppMode.NORMAL
            state.update_filter("")
        elif key.code is KeyCode.BACKSPACE:
            state.update_filter(state.filter_text[:-1])
        elif key.code is KeyCode.CHAR and not key.ctrl:
            state.update_filter(state.filter_text + key.char)

    def _handle_variables_key(self, key: KeyEvent) -> None:
        if key.code is KeyCode.ESC or key.is_char('v'):
            self.state.mode = AppMode.NORMAL
        elif key.is_char('w'):
            self.state.save_variables()

    def _handle_history_key(self, key: KeyEvent) -> None:
        state = self.state
        if key.code is KeyCode.ESC or key.is_char('h'):
            state.mode = AppMode.NORMAL
        elif key.code is KeyCode.UP or key.is_char('k'):
            state.move_history_up()
        elif key.code is KeyCode.DOWN or key.is_char('j'):
            state.move_history_down()
        elif key.code is KeyCode.ENTER:
            state.load_selected_history()

    async def _handle_command_key(self, key: KeyEvent) -> None:
        if key.code is KeyCode.ESC:
            self.state.mode = AppMode.NORMAL
        elif key.is_char('e'):
            await self.edit_current_request()
            self.state.mode = AppMode.NORMAL

    def execute_current_request(self) -> Optional[asyncio.Task]:
        """Start the selected request in the background.

        No-op while another execution is in flight.
        """
        state = self.state
        template = state.get_current_request()
        if template is None:
            state.status_message = "No request selected"
            return None
        if state.is_executing:
            return None

        task = asyncio.create_task(
            run_execution(
                self.executor.clone(),
                copy.deepcopy(template),
                state.interpolator.snapshot(),
                self.channel,
            )
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        state.mark_executing(template.name)
        return task

    async def edit_current_request(self) -> None:
        """Edit the selected template externally and persist the collection.

        The edit is applied only if the editor succeeds and its output is a
        valid template; otherwise the original stays and the status line says
        why.
        """
        state = self.state
        template = state.get_current_request()
        if template is None:
            state.status_message = "No request selected"
            return

        # The editor gets the real terminal while textual is suspended
        released = self.terminal.suspend() if self.terminal is not None else nullcontext()
        try:
            with released:
                edited = await asyncio.to_thread(self.editor.edit, template)
        except (EditorFailure, EditDecodeFailure) as e:
            logger.warning(f"Edit of '{template.name}' discarded: {e}")
            state.status_message = f"Error: {e}"
            return

        if edited.name != template.name and find_request(
            state.collection, edited.name
        ):
            state.status_message = (
                f"Error: a request named '{edited.name}' already exists"
            )
            return

        state.replace_request(template.name, edited)
        # The edit may move the request in or out of the active filter
        state.update_filter(state.filter_text)
        try:
            state.save_collection()
        except PersistenceFailure as e:
            logger.warning(str(e))
            state.status_message = f"Failed to save: {e}"
        else:
            state.status_message = f"Updated request '{edited.name}'"


async def run_tui(collection_path: Path, settings: Settings) -> None:
    app = TuiApp.create(collection_path, settings)
    await app.run()
