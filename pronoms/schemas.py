"""Core data models — shared Pydantic types for the weak-pronoun quiz.

Every item, answer, hint and persisted snapshot flows through these types.
Wire models accept the camelCase field names the quiz service speaks
(``gameSessionId``, ``fullSentence``...) and expose snake_case attributes.

This is a Tier 1 leaf module: it imports only from pydantic and the stdlib.
No project imports allowed — everything else imports from here.

Usage:
    from pronoms.schemas import Item, AnswerResult, SessionSnapshot
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Difficulty
# ---------------------------------------------------------------------------


class Difficulty(str, Enum):
    """Display-only difficulty tier of a sentence."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def label(self) -> str:
        """Catalan label used on the sentence card."""
        return _CATALAN_LABELS[self]


_CATALAN_LABELS = {
    Difficulty.EASY: "Fàcil",
    Difficulty.MEDIUM: "Mitjà",
    Difficulty.HARD: "Difícil",
}

# Tokens accepted in the dataset's difficulty column.
DIFFICULTY_TOKENS: dict[str, Difficulty] = {
    "facil": Difficulty.EASY,
    "mitja": Difficulty.MEDIUM,
    "dificil": Difficulty.HARD,
    "easy": Difficulty.EASY,
    "medium": Difficulty.MEDIUM,
    "hard": Difficulty.HARD,
}


class _WireModel(BaseModel):
    """Frozen model that reads camelCase aliases and snake_case names alike."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------


class Sentence(BaseModel):
    """One record of the local dataset."""

    model_config = ConfigDict(frozen=True)

    full_form: str
    short_form: str
    difficulty: Difficulty
    explanation: str


class Item(_WireModel):
    """The sentence currently being played. Immutable once issued."""

    item_id: int = Field(alias="sentenceId", ge=1)
    full_form: str = Field(alias="fullSentence", min_length=1)
    difficulty: Difficulty


class FirstItem(Item):
    """Response to fetching the first item of a fresh session.

    ``session_id`` is None for providers that do not issue sessions, and
    ``total_items`` is None when the session is unbounded.
    """

    session_id: str | None = Field(default=None, alias="gameSessionId")
    total_items: int | None = Field(default=None, alias="totalSentences", ge=1)

    def as_item(self) -> Item:
        """Drops the session fields."""
        return Item(item_id=self.item_id, full_form=self.full_form, difficulty=self.difficulty)


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------


class AnswerRequest(_WireModel):
    """A graded submission for the current item."""

    session_id: str | None = Field(alias="gameSessionId")
    item_id: int = Field(alias="sentenceId")
    answer: str
    attempts: int


class AnswerResult(_WireModel):
    """Grading outcome.

    ``next_item`` is only meaningful when ``correct`` is True: an item means
    the session continues, None means the session is complete.
    """

    correct: bool
    short_form: str | None = Field(default=None, alias="correctAnswer")
    explanation: str | None = None
    next_item: Item | None = Field(default=None, alias="nextSentence")

    @field_validator("correct", mode="before")
    @classmethod
    def _strict_bool(cls, value: object) -> object:
        if not isinstance(value, bool):
            raise ValueError("correct must be a boolean")
        return value


class Solution(BaseModel):
    """Answer and rationale revealed on request, with the item to play next."""

    model_config = ConfigDict(frozen=True)

    short_form: str
    explanation: str
    next_item: Item


# ---------------------------------------------------------------------------
# Hints
# ---------------------------------------------------------------------------


class HintRequest(_WireModel):
    """Asks for the hint at ``hint_cursor`` for the current item."""

    session_id: str | None = Field(alias="gameSessionId")
    item_id: int = Field(alias="sentenceId")
    hint_cursor: int = Field(alias="hintIndex", ge=0)


class HintResult(_WireModel):
    """One hint, plus the cursor and limit as the provider sees them."""

    hint_text: str | None = Field(default=None, alias="hint")
    hint_cursor: int = Field(alias="hintIndex", strict=True, ge=0)
    hint_limit: int = Field(alias="totalHints", strict=True, ge=0)


class HintState(BaseModel):
    """Per-item hint progress. Reset whenever a new item is applied."""

    revealed: list[str] = Field(default_factory=list)
    cursor: int = 0
    limit: int = 0
    limit_known: bool = False

    @property
    def exhausted(self) -> bool:
        return self.limit_known and self.cursor >= self.limit


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


class SessionSnapshot(BaseModel):
    """Everything needed to resume a session later the same day."""

    session_id: str | None = None
    total_items: int | None = None
    current_item_id: int
    current_item: Item
    attempts_by_item: dict[int, int]
