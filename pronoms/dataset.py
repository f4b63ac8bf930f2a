"""Sentence dataset — CSV parsing, random selection, answer comparison.

The dataset is a header line followed by records of exactly four fields:
full form, short form, difficulty, explanation. Fields may be quoted to
contain commas, and ``""`` inside a quoted field is a literal quote. Records
are one per line.

Bad records are skipped with a warning so one typo doesn't take the whole
game down; a dataset with no usable record after the header is fatal.

Tier 2 module: imports from pronoms.schemas and pronoms.errors (Tier 1).
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from pathlib import Path

from pronoms.errors import DatasetLoadError
from pronoms.schemas import DIFFICULTY_TOKENS, Sentence

logger = logging.getLogger(__name__)

FIELD_COUNT = 4


def split_line(line: str) -> list[str]:
    """Splits one CSV line into raw fields, honouring quotes.

    Every ``"`` toggles quoted mode wherever it appears in a field, except
    ``""`` inside quotes, which is a literal quote. Commas split fields only
    outside quotes. Fields are returned untrimmed.

    >>> split_line('A,"B, and C",facil,D')
    ['A', 'B, and C', 'facil', 'D']
    """
    fields: list[str] = []
    current: list[str] = []
    quoted = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == '"':
            if quoted and line[i + 1:i + 2] == '"':
                current.append('"')
                i += 1
            else:
                quoted = not quoted
        elif char == "," and not quoted:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1
    fields.append("".join(current))
    return fields


def parse_csv(content: str) -> list[Sentence]:
    """Parses dataset text into sentences.

    Args:
        content: The whole CSV text, header included.

    Returns:
        Valid sentences in file order. Records with the wrong field count
        or an unknown difficulty token are skipped with a logged warning.

    Raises:
        DatasetLoadError: If the text has no data line after the header.
    """
    lines = [line for line in content.splitlines() if line.strip()]
    if len(lines) < 2:
        raise DatasetLoadError("dataset must contain a header and at least one data row")

    sentences: list[Sentence] = []
    # Line numbers are 1-based and count the header.
    for number, line in enumerate(lines[1:], start=2):
        fields = split_line(line.strip())
        if len(fields) != FIELD_COUNT:
            logger.warning(
                "Skipping line %d: expected %d fields, got %d", number, FIELD_COUNT, len(fields)
            )
            continue
        full_form, short_form, token, explanation = fields
        difficulty = DIFFICULTY_TOKENS.get(token.strip())
        if difficulty is None:
            logger.warning("Skipping line %d: invalid difficulty level %r", number, token)
            continue
        sentences.append(
            Sentence(
                full_form=full_form.strip(),
                short_form=short_form.strip(),
                difficulty=difficulty,
                explanation=explanation.strip(),
            )
        )
    return sentences


def load_sentences(path: str | Path) -> list[Sentence]:
    """Reads and parses the dataset file.

    Raises:
        DatasetLoadError: If the file cannot be read, or holds no valid
            sentence.
    """
    try:
        content = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise DatasetLoadError(f"cannot read {path}: {exc}") from exc

    sentences = parse_csv(content)
    if not sentences:
        raise DatasetLoadError(f"{path} has no valid sentences")
    logger.info("Loaded %d sentences from %s", len(sentences), path)
    return sentences


def pick_random(sentences: Sequence[Sentence], rng: random.Random | None = None) -> Sentence:
    """Picks one sentence uniformly at random, with replacement."""
    if not sentences:
        raise DatasetLoadError("no sentences available")
    return (rng or random).choice(sentences)


def check_answer(candidate: str, canonical: str) -> bool:
    """Exact comparison after trimming surrounding whitespace.

    No case folding and no diacritic normalisation: ``dona-me-la`` does not
    match ``Dóna-me-la``.
    """
    return candidate.strip() == canonical.strip()
