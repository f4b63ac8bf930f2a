"""Local dataset provider — offline play from the sentence CSV.

Loads the dataset once, then serves an endless stream of randomly chosen
sentences (uniform, with replacement). Grading is local trimmed string
equality. There are no hints; instead the player may reveal the solution.

The provider remembers which sentence it issued for the current and the
staged ordinal only, so its ``_issued`` map stays at two entries however
long the game runs. The session's attempt map still gains one key per item.

Tier 2 service — imports from base.py (Tier 1) and pronoms.dataset.
"""

from __future__ import annotations

import asyncio
import logging
import random
from pathlib import Path

from pronoms.dataset import check_answer, load_sentences, pick_random
from pronoms.errors import DatasetLoadError, InvalidRequestError
from pronoms.providers.base import SentenceProvider
from pronoms.schemas import (
    AnswerRequest,
    AnswerResult,
    FirstItem,
    Item,
    Sentence,
    SessionSnapshot,
    Solution,
)

logger = logging.getLogger(__name__)


class LocalDatasetProvider(SentenceProvider):
    """Sentence provider reading from a local CSV dataset.

    Args:
        path: Dataset file. Read on first use, never again.
        sentences: Already-parsed sentences; skips the file entirely.
        rng: Random source for selection, injectable for deterministic tests.
    """

    supports_solution = True

    def __init__(
        self,
        path: str | Path | None = None,
        *,
        sentences: list[Sentence] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if path is None and sentences is None:
            raise ValueError("LocalDatasetProvider needs a dataset path or sentences")
        self._path = path
        self._sentences = sentences
        self._rng = rng or random.Random()
        self._issued: dict[int, Sentence] = {}

    async def _dataset(self) -> list[Sentence]:
        if self._sentences is None:
            self._sentences = await asyncio.to_thread(load_sentences, self._path)
        return self._sentences

    def _sentence_for(self, item_id: int) -> Sentence:
        try:
            return self._issued[item_id]
        except KeyError:
            raise InvalidRequestError(f"item {item_id} was not issued by this provider") from None

    async def _issue(self, item_id: int) -> Item:
        sentence = pick_random(await self._dataset(), self._rng)
        # Keep only the item being played and the one being staged.
        self._issued = {k: v for k, v in self._issued.items() if k >= item_id - 1}
        self._issued[item_id] = sentence
        return Item(item_id=item_id, full_form=sentence.full_form, difficulty=sentence.difficulty)

    async def fetch_next(self) -> FirstItem:
        self._issued.clear()
        item = await self._issue(1)
        return FirstItem(
            item_id=item.item_id,
            full_form=item.full_form,
            difficulty=item.difficulty,
            session_id=None,
            total_items=None,
        )

    async def submit_answer(self, request: AnswerRequest) -> AnswerResult:
        sentence = self._sentence_for(request.item_id)
        if not check_answer(request.answer, sentence.short_form):
            return AnswerResult(correct=False)
        return AnswerResult(
            correct=True,
            short_form=sentence.short_form,
            explanation=sentence.explanation,
            next_item=await self._issue(request.item_id + 1),
        )

    async def reveal_solution(self, item: Item) -> Solution:
        sentence = self._sentence_for(item.item_id)
        return Solution(
            short_form=sentence.short_form,
            explanation=sentence.explanation,
            next_item=await self._issue(item.item_id + 1),
        )

    async def resume(self, snapshot: SessionSnapshot) -> bool:
        """Finds the snapshot's sentence in the dataset again.

        Returns False when the dataset cannot be loaded or no longer holds
        that sentence, so the session starts over.
        """
        try:
            sentences = await self._dataset()
        except DatasetLoadError:
            return False
        item = snapshot.current_item
        for sentence in sentences:
            if sentence.full_form == item.full_form and sentence.difficulty == item.difficulty:
                self._issued = {item.item_id: sentence}
                return True
        logger.info("Saved sentence is no longer in the dataset, starting over")
        return False
