"""Game session state machine — one day's play, persisted and restorable.

States:

    LOADING ──► ERROR ──(retry_load)──► LOADING
       │
       ▼
    AWAITING_ANSWER ◄──(retry / advance)── SHOWING_FEEDBACK
       │   (submit / reveal_solution)  ──►       │
       │                                         │
       └──────(correct, no next item)──► COMPLETE ──(restart)──► LOADING

Every transition that changes the session's identity (session id, current
item, attempt counts) writes a full snapshot through SessionPersistence.
The attempt count is bumped and saved *before* the provider grades the
answer, and is kept even if the provider call fails.

While a provider call is outstanding every other mutating call is ignored,
so a double-clicked submit cannot count or grade twice.

Tier 3 orchestration module: imports from providers/base (Tier 1),
persistence (Tier 2), schemas and errors (Tier 1).

Usage:
    session = GameSession(provider, JsonFileStorage(path))
    await session.load()
    await session.submit("Dóna-me-la")
    if session.phase is Phase.SHOWING_FEEDBACK:
        session.advance()
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import Enum

from pronoms.errors import InvalidRequestError, MalformedResponseError, ProviderError
from pronoms.hooks.interfaces import StateStorage
from pronoms.persistence import SessionPersistence
from pronoms.providers.base import SentenceProvider
from pronoms.schemas import (
    AnswerRequest,
    FirstItem,
    HintRequest,
    HintState,
    Item,
    SessionSnapshot,
)

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    AWAITING_ANSWER = "awaiting_answer"
    SHOWING_FEEDBACK = "showing_feedback"
    COMPLETE = "complete"


class FeedbackMode(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    SOLUTION = "solution"


@dataclass(frozen=True)
class Feedback:
    """What the feedback panel shows. Solution fields are empty when incorrect."""

    mode: FeedbackMode
    short_form: str = ""
    explanation: str = ""


def _exclusive(method):
    """Drops the call if another exclusive call is still awaiting I/O."""

    @functools.wraps(method)
    async def wrapper(self: GameSession, *args, **kwargs):
        if self._busy:
            logger.debug("Ignoring %s while another call is outstanding", method.__name__)
            return None
        self._busy = True
        try:
            return await method(self, *args, **kwargs)
        finally:
            self._busy = False

    return wrapper


class GameSession:
    """Client-side play session driven by front-end events.

    Args:
        provider: The active sentence provider.
        storage: Where snapshots are persisted.
        today: Returns the current local date; injectable for day-rollover
            tests.
    """

    def __init__(
        self,
        provider: SentenceProvider,
        storage: StateStorage,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._provider = provider
        self._persistence = SessionPersistence(storage)
        self._today = today
        self._busy = False
        self._staged: Item | None = None

        self.phase = Phase.LOADING
        self.error: str | None = None
        self.session_id: str | None = None
        self.total_items: int | None = None
        self.current_item: Item | None = None
        self.attempts_by_item: dict[int, int] = {}
        self.created_on: date | None = None
        self.hints = HintState()
        self.feedback: Feedback | None = None
        self.answer = ""

    # -- queries -----------------------------------------------------------

    @property
    def provider(self) -> SentenceProvider:
        return self._provider

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def is_active(self) -> bool:
        """True if there is an item to answer and, where required, a session id."""
        if self.current_item is None:
            return False
        return bool(self.session_id) or not self._provider.issues_sessions

    @property
    def current_attempts(self) -> int:
        if self.current_item is None:
            return 0
        return self.attempts_by_item.get(self.current_item.item_id, 0)

    @property
    def has_staged_item(self) -> bool:
        return self._staged is not None

    @property
    def can_request_hint(self) -> bool:
        return (
            self._provider.supports_hints
            and self.phase is Phase.AWAITING_ANSWER
            and self.is_active
            and not self.hints.exhausted
        )

    @property
    def can_reveal_solution(self) -> bool:
        return (
            self._provider.supports_solution
            and self.phase is Phase.AWAITING_ANSWER
            and self.is_active
        )

    def summary(self) -> list[tuple[int, int]]:
        """Attempt counts per item ordinal, in order."""
        return sorted(self.attempts_by_item.items())

    def snapshot(self) -> SessionSnapshot:
        if self.current_item is None:
            raise InvalidRequestError("no item has been loaded")
        return SessionSnapshot(
            session_id=self.session_id,
            total_items=self.total_items,
            current_item_id=self.current_item.item_id,
            current_item=self.current_item,
            attempts_by_item=dict(self.attempts_by_item),
        )

    # -- loading -----------------------------------------------------------

    @_exclusive
    async def load(self, *, force_new: bool = False) -> None:
        """Enters LOADING; restores today's session or starts a fresh one.

        Args:
            force_new: Skip restoring and discard anything persisted.
        """
        self._reset()
        today = self._today()

        if not force_new:
            snapshot = self._persistence.load(today)
            if snapshot is not None and self._restorable(snapshot):
                if await self._provider.resume(snapshot):
                    self._apply_snapshot(snapshot, today)
                    return
        self._persistence.clear()

        try:
            first = await self._provider.fetch_next()
            self._check_first(first)
        except ProviderError as exc:
            logger.warning("Could not start a session: %s", exc.message)
            self.phase = Phase.ERROR
            self.error = exc.message
            return

        self.session_id = first.session_id
        self.total_items = first.total_items
        self.current_item = first.as_item()
        if self.total_items is None:
            self.attempts_by_item = {first.item_id: 0}
        else:
            self.attempts_by_item = {i: 0 for i in range(1, self.total_items + 1)}
        self.created_on = today
        self.phase = Phase.AWAITING_ANSWER
        self._save()
        logger.info("Started session %s on %s", self.session_id or "(local)", today.isoformat())

    async def start(self) -> None:
        """Mount-time entry point: resume today's session or begin one."""
        await self.load()

    async def retry_load(self) -> None:
        """The Error screen's retry action."""
        if self.phase is Phase.ERROR:
            await self.load()

    async def restart(self) -> None:
        """Discards today's session and starts a new one."""
        await self.load(force_new=True)

    def _reset(self) -> None:
        self.phase = Phase.LOADING
        self.error = None
        self.session_id = None
        self.total_items = None
        self.current_item = None
        self.attempts_by_item = {}
        self.created_on = None
        self.hints = HintState()
        self.feedback = None
        self.answer = ""
        self._staged = None

    def _restorable(self, snapshot: SessionSnapshot) -> bool:
        if self._provider.issues_sessions and not snapshot.session_id:
            return False
        if snapshot.current_item.item_id != snapshot.current_item_id:
            return False
        if snapshot.current_item_id not in snapshot.attempts_by_item:
            return False
        if any(count < 0 for count in snapshot.attempts_by_item.values()):
            return False
        if snapshot.total_items is not None:
            expected = set(range(1, snapshot.total_items + 1))
            return set(snapshot.attempts_by_item) == expected
        return True

    def _apply_snapshot(self, snapshot: SessionSnapshot, today: date) -> None:
        self.session_id = snapshot.session_id
        self.total_items = snapshot.total_items
        self.current_item = snapshot.current_item
        self.attempts_by_item = dict(snapshot.attempts_by_item)
        self.created_on = today
        self.phase = Phase.AWAITING_ANSWER
        logger.info(
            "Restored session %s at item %d",
            self.session_id or "(local)",
            snapshot.current_item_id,
        )

    def _check_first(self, first: FirstItem) -> None:
        if first.total_items is not None and first.item_id > first.total_items:
            raise MalformedResponseError()

    def _save(self) -> None:
        self._persistence.save(self.snapshot(), self.created_on or self._today())

    def _fail(self, action: str, exc: ProviderError) -> None:
        logger.warning("%s failed: %s", action, exc.message)
        self.error = exc.message

    # -- playing -----------------------------------------------------------

    @_exclusive
    async def submit(self, answer: str) -> None:
        """Grades a candidate answer for the current item.

        Empty or whitespace-only answers, and submissions without an active
        session, are ignored.
        """
        candidate = answer.strip()
        if self.phase is not Phase.AWAITING_ANSWER or not candidate or not self.is_active:
            return

        item_id = self.current_item.item_id
        self.answer = candidate
        self.error = None
        self.attempts_by_item[item_id] += 1
        self._save()

        request = AnswerRequest(
            session_id=self.session_id,
            item_id=item_id,
            answer=candidate,
            attempts=self.attempts_by_item[item_id],
        )
        try:
            result = await self._provider.submit_answer(request)
            if result.correct and result.next_item is not None:
                self._check_next(result.next_item)
        except ProviderError as exc:
            self._fail("Answer check", exc)
            return
        except InvalidRequestError:
            logger.debug("Provider refused answer for item %d", item_id)
            return

        if not result.correct:
            self.feedback = Feedback(FeedbackMode.INCORRECT)
            self.phase = Phase.SHOWING_FEEDBACK
            return

        self.feedback = Feedback(
            FeedbackMode.CORRECT,
            short_form=result.short_form or "",
            explanation=result.explanation or "",
        )
        if result.next_item is None:
            self.phase = Phase.COMPLETE
            logger.info("Session %s complete: %s", self.session_id or "(local)", self.summary())
            return
        self._staged = result.next_item
        self.phase = Phase.SHOWING_FEEDBACK

    def _check_next(self, item: Item) -> None:
        if self.total_items is not None and item.item_id not in self.attempts_by_item:
            raise MalformedResponseError()

    @_exclusive
    async def request_hint(self) -> None:
        """Reveals the next hint for the current item, if any are left."""
        if not self.can_request_hint:
            return

        self.error = None
        request = HintRequest(
            session_id=self.session_id,
            item_id=self.current_item.item_id,
            hint_cursor=self.hints.cursor,
        )
        try:
            result = await self._provider.request_hint(request)
        except ProviderError as exc:
            self._fail("Hint request", exc)
            return
        except InvalidRequestError:
            logger.debug("Provider refused hint for item %d", request.item_id)
            return

        self.hints.limit = result.hint_limit
        self.hints.limit_known = True
        if result.hint_text and self.hints.cursor < self.hints.limit:
            self.hints.revealed.append(result.hint_text)
            self.hints.cursor += 1

    @_exclusive
    async def reveal_solution(self) -> None:
        """Ends the current attempt by showing the answer (local mode)."""
        if not self.can_reveal_solution:
            return

        self.error = None
        try:
            solution = await self._provider.reveal_solution(self.current_item)
        except ProviderError as exc:
            self._fail("Solution reveal", exc)
            return
        except InvalidRequestError:
            logger.debug("Provider refused solution for item %d", self.current_item.item_id)
            return

        self.feedback = Feedback(
            FeedbackMode.SOLUTION,
            short_form=solution.short_form,
            explanation=solution.explanation,
        )
        self._staged = solution.next_item
        self.phase = Phase.SHOWING_FEEDBACK

    def advance(self) -> None:
        """Moves on to the staged item after a correct answer or a reveal."""
        if self._busy or self.phase is not Phase.SHOWING_FEEDBACK:
            return
        if self.feedback is None or self.feedback.mode is FeedbackMode.INCORRECT:
            return
        if self._staged is None:
            return

        self.current_item = self._staged
        self._staged = None
        self.attempts_by_item.setdefault(self.current_item.item_id, 0)
        self.hints = HintState()
        self.feedback = None
        self.answer = ""
        self.error = None
        self.phase = Phase.AWAITING_ANSWER
        self._save()

    def retry(self) -> None:
        """Clears an incorrect verdict so the player can try again."""
        if self._busy or self.phase is not Phase.SHOWING_FEEDBACK:
            return
        if self.feedback is None or self.feedback.mode is not FeedbackMode.INCORRECT:
            return
        self.feedback = None
        self.answer = ""
        self.phase = Phase.AWAITING_ANSWER
