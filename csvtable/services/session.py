from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path

from ..config.loader import Settings, load_config
from ..csvfile.decoder import decode
from ..csvfile.validator import validate
from ..logging.init import setup_logging
from ..models.decode_error import UNKNOWN_POSITION, CsvDecodeError, DecodeError, DecodeReason
from ..models.file_meta import PickedFile
from ..models.intents import Clear, ContentRead, FileSelected, Intent, RequestUpload, SortBy
from ..models.record import AS_READ
from ..models.session_state import (
    AwaitingPick,
    DecodeFailed,
    Idle,
    Loaded,
    ReadingFile,
    RejectedFile,
    SessionState,
)
from .sorter import apply_sort

"""Session state machine.

One consumer processes intents from a queue, one at a time; each processed intent
replaces the SessionState wholesale. The file picker and the content read run as
asyncio tasks whose results come back as intents (FileSelected / ContentRead)
through the same queue, so no state is touched outside the consumer.

A picker that returns None (closed by the user) posts nothing and leaves the session
in AwaitingPick, from where RequestUpload opens the picker again. A read that never completes leaves it in ReadingFile; there is no
timeout.
"""

__all__ = [
    "FilePicker",
    "Session",
    "open_session",
]

logger = logging.getLogger(__name__)

FilePicker = Callable[[], Awaitable[PickedFile | None]]

Effect = Callable[[], Awaitable[None]]


def _state_name(state: SessionState) -> str:
    return type(state).__name__


class Session:
    """Owns the current SessionState and the intent queue.

    Drive it with ``post()`` plus ``await run_until_idle()`` (tests, scripted
    adapters) or keep ``await run()`` alive as the adapter's event loop.
    """

    def __init__(self, picker: FilePicker, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self._picker = picker
        self._state: SessionState = Idle()
        self._queue: asyncio.Queue[Intent] = asyncio.Queue()
        self._tasks: set[asyncio.Task[None]] = set()
        self._attempts = 0
        self._subscribers: list[Callable[[SessionState], None]] = []
        self._handlers = {
            RequestUpload: self._on_request_upload,
            FileSelected: self._on_file_selected,
            ContentRead: self._on_content_read,
            SortBy: self._on_sort_by,
            Clear: self._on_clear,
        }

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, callback: Callable[[SessionState], None]) -> None:
        """Call ``callback`` with every new state."""
        self._subscribers.append(callback)

    def post(self, intent: Intent) -> None:
        self._queue.put_nowait(intent)

    async def run(self) -> None:
        while True:
            intent = await self._queue.get()
            self._process(intent)

    async def run_until_idle(self) -> SessionState:
        """Process intents until the queue is empty and no effect task is pending."""
        while True:
            while not self._queue.empty():
                self._process(self._queue.get_nowait())
            pending = {t for t in self._tasks if not t.done()}
            if not pending:
                if self._queue.empty():
                    return self._state
                continue
            await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)

    # -- processing -------------------------------------------------------

    def _process(self, intent: Intent) -> None:
        previous = self._state
        handler = self._handlers[type(intent)]
        outcome = handler(previous, intent)
        if outcome is None:
            logger.debug("ignored intent=%s state=%s", type(intent).__name__, _state_name(previous))
            return
        new_state, effect = outcome
        self._state = new_state
        logger.info(
            "transition %s -> %s intent=%s",
            _state_name(previous),
            _state_name(new_state),
            type(intent).__name__,
        )
        for callback in self._subscribers:
            callback(new_state)
        if effect is not None:
            self._spawn(effect)

    def _spawn(self, effect: Effect) -> None:
        task = asyncio.get_running_loop().create_task(effect())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _next_attempt(self) -> int:
        self._attempts += 1
        return self._attempts

    def _on_request_upload(self, state: SessionState, intent: RequestUpload):
        # From AwaitingPick a new attempt reopens the picker; the earlier
        # attempt's FileSelected no longer matches and is dropped.
        if isinstance(state, ReadingFile):
            return None
        attempt = self._next_attempt()
        return AwaitingPick(attempt), lambda: self._pick(attempt)

    def _on_file_selected(self, state: SessionState, intent: FileSelected):
        if not isinstance(state, AwaitingPick) or state.attempt != intent.attempt:
            return None
        meta = intent.file.meta
        rejection = validate(
            meta,
            max_bytes=self.settings.max_file_bytes,
            content_type=self.settings.content_type,
        )
        if rejection is not None:
            logger.warning(
                "rejected file=%s size=%s type=%s reason=%s",
                meta.name,
                meta.size,
                meta.content_type,
                rejection.name,
            )
            return RejectedFile(rejection, meta), None
        return ReadingFile(state.attempt, meta), lambda: self._read(state.attempt, intent.file)

    def _on_content_read(self, state: SessionState, intent: ContentRead):
        if not isinstance(state, ReadingFile) or state.attempt != intent.attempt:
            return None
        try:
            records = self._decode_content(intent)
        except CsvDecodeError as e:
            logger.warning("decode failed file=%s: %s", state.file.name, e.error.describe())
            return DecodeFailed(e.error), None
        logger.info("loaded file=%s records=%s", state.file.name, len(records))
        return Loaded(tuple(records), AS_READ), None

    def _decode_content(self, intent: ContentRead):
        if intent.failure is not None:
            raise CsvDecodeError(
                DecodeError(
                    row=UNKNOWN_POSITION,
                    field=UNKNOWN_POSITION,
                    reason=DecodeReason.READ_FAILED,
                    detail=str(intent.failure),
                )
            )
        try:
            text = (intent.content or b"").decode(self.settings.encoding)
        except UnicodeDecodeError as e:
            raise CsvDecodeError(
                DecodeError(
                    row=UNKNOWN_POSITION,
                    field=UNKNOWN_POSITION,
                    reason=DecodeReason.INVALID_ENCODING,
                    detail=str(e),
                )
            ) from e
        return decode(text)

    def _on_sort_by(self, state: SessionState, intent: SortBy):
        if not isinstance(state, Loaded):
            return None
        records, sort_state = apply_sort(state.as_read, intent.column, state.sort_state)
        return Loaded(tuple(records), sort_state, as_read=state.as_read), None

    def _on_clear(self, state: SessionState, intent: Clear):
        if isinstance(state, Idle):
            return None
        # pending pick/read completions no longer match any state attempt
        return Idle(), None

    # -- effects ----------------------------------------------------------

    async def _pick(self, attempt: int) -> None:
        try:
            picked = await self._picker()
        except Exception:
            logger.exception("file picker failed attempt=%s", attempt)
            return
        if picked is None:
            logger.debug("picker closed without a file attempt=%s", attempt)
            return
        self.post(FileSelected(attempt, picked))

    async def _read(self, attempt: int, picked: PickedFile) -> None:
        try:
            content = await picked.read()
        except Exception as e:
            logger.error("reading file=%s failed: %s", picked.meta.name, e)
            self.post(ContentRead(attempt, failure=e))
            return
        self.post(ContentRead(attempt, content=content))


def open_session(picker: FilePicker, config_path: Path | None = None, *, load_env: bool = False) -> Session:
    """Load settings, configure logging and return a fresh Session in Idle."""
    settings = load_config(config_path, load_env=load_env)
    setup_logging(settings.log_level)
    return Session(picker, settings)
