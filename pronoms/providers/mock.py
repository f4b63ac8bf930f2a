"""Mock sentence provider for testing and development.

Deterministic, offline SentenceProvider that behaves like the remote quiz
service: a fixed session of scripted sentences, server-side style grading,
and scripted hints. Used by:
- Every session state machine test (via conftest.mock_provider fixture)
- Development mode for trying the terminal front-end without a server
- Reference implementation of the remote half of the provider contract

Tier 2 service — imports only from base.py (Tier 1).
"""

from pronoms.providers.base import SentenceProvider
from pronoms.schemas import (
    AnswerRequest,
    AnswerResult,
    Difficulty,
    FirstItem,
    HintRequest,
    HintResult,
    Item,
    Sentence,
)

_DEFAULT_SENTENCES = [
    Sentence(
        full_form="Dóna la pilota a mi",
        short_form="Dóna-me-la",
        difficulty=Difficulty.EASY,
        explanation="Em + la davant d'imperatiu: -me-la.",
    ),
    Sentence(
        full_form="Porta el llibre a ell",
        short_form="Porta-l'hi",
        difficulty=Difficulty.MEDIUM,
        explanation="El + li es combinen com l'hi.",
    ),
    Sentence(
        full_form="Compra pomes",
        short_form="Compra'n",
        difficulty=Difficulty.EASY,
        explanation="Un complement indeterminat es substitueix per en.",
    ),
    Sentence(
        full_form="Vaig a casa",
        short_form="Hi vaig",
        difficulty=Difficulty.EASY,
        explanation="Un complement de lloc es substitueix per hi.",
    ),
    Sentence(
        full_form="Explica la història a nosaltres",
        short_form="Explica-ens-la",
        difficulty=Difficulty.HARD,
        explanation="Ens + la darrere del verb: -ens-la.",
    ),
]


class MockProvider(SentenceProvider):
    """Scripted provider for tests.

    Items are numbered 1..len(sentences). A correct answer for the last
    item returns ``next_item=None``, ending the session.

    Args:
        sentences: The session's sentences, in play order. Defaults to five
            built-in ones.
        hints: Hint texts per item id. Items without an entry have none.
        session_id: Session token returned by ``fetch_next``.
        error: If set, every call raises it immediately. Tests may assign
            it between calls to simulate an outage.
    """

    issues_sessions = True
    supports_hints = True

    def __init__(
        self,
        sentences: list[Sentence] | None = None,
        hints: dict[int, list[str]] | None = None,
        session_id: str = "mock-session-0001",
        error: Exception | None = None,
    ) -> None:
        self.sentences = sentences if sentences is not None else list(_DEFAULT_SENTENCES)
        self.hints = hints or {}
        self.session_id = session_id
        self.error = error
        self.calls: list[tuple[str, object]] = []

    def answer_for(self, item_id: int) -> str:
        """Short form expected for an item (test convenience)."""
        return self.sentences[item_id - 1].short_form

    def _item(self, item_id: int) -> Item:
        sentence = self.sentences[item_id - 1]
        return Item(item_id=item_id, full_form=sentence.full_form, difficulty=sentence.difficulty)

    def _check_error(self) -> None:
        if self.error is not None:
            raise self.error

    async def fetch_next(self) -> FirstItem:
        self.calls.append(("fetch_next", None))
        self._check_error()
        item = self._item(1)
        return FirstItem(
            item_id=item.item_id,
            full_form=item.full_form,
            difficulty=item.difficulty,
            session_id=self.session_id,
            total_items=len(self.sentences),
        )

    async def submit_answer(self, request: AnswerRequest) -> AnswerResult:
        self.calls.append(("submit_answer", request))
        self._check_error()
        sentence = self.sentences[request.item_id - 1]
        if request.answer.strip() != sentence.short_form:
            return AnswerResult(correct=False)
        has_next = request.item_id < len(self.sentences)
        return AnswerResult(
            correct=True,
            short_form=sentence.short_form,
            explanation=sentence.explanation,
            next_item=self._item(request.item_id + 1) if has_next else None,
        )

    async def request_hint(self, request: HintRequest) -> HintResult:
        self.calls.append(("request_hint", request))
        self._check_error()
        texts = self.hints.get(request.item_id, [])
        text = texts[request.hint_cursor] if request.hint_cursor < len(texts) else None
        return HintResult(hint_text=text, hint_cursor=request.hint_cursor, hint_limit=len(texts))
