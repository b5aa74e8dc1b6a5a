"""
Random payload pieces for scenarios: identifiers, names, prose, emails.

All functions draw from a module-level ``random.Random``; pass ``rng`` to use
another one (a seeded instance makes a run reproducible).
"""

from __future__ import annotations

import random
import string
import uuid as _uuid
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

_rng = random.Random()

ALPHA_NUMERIC = string.ascii_lowercase + string.digits


def seed(value: int) -> None:
    _rng.seed(value)


def alphabets(length: int, rng: Optional[random.Random] = None) -> str:
    r = rng or _rng
    return "".join(r.choice(string.ascii_lowercase) for _ in range(length))


def alpha_numeric(length: int, rng: Optional[random.Random] = None) -> str:
    r = rng or _rng
    return "".join(r.choice(ALPHA_NUMERIC) for _ in range(length))


def _word(r: random.Random, word_min: int = 3, word_max: int = 7) -> str:
    return alphabets(r.randint(word_min, word_max), r)


def name(words: int = 2, rng: Optional[random.Random] = None) -> str:
    r = rng or _rng
    return " ".join(_word(r) for _ in range(words))


def paragraph(
    sentences: int = 3,
    word_min: int = 3,
    word_max: int = 7,
    rng: Optional[random.Random] = None,
) -> str:
    """``sentences`` sentences of 3 to 8 words, each capitalized and terminated."""
    r = rng or _rng
    out = []
    for _ in range(sentences):
        words = " ".join(_word(r, word_min, word_max) for _ in range(r.randint(3, 8)))
        out.append(words.capitalize() + ".")
    return " ".join(out)


def content(paragraphs: int = 3, sentences: int = 4, rng: Optional[random.Random] = None) -> str:
    r = rng or _rng
    return "\n\n".join(paragraph(sentences, rng=r) for _ in range(paragraphs))


def email(rng: Optional[random.Random] = None) -> str:
    """Long enough local part that two random actors never collide in practice."""
    return f"{alpha_numeric(16, rng)}@example.com"


def uuid() -> str:
    return str(_uuid.uuid4())


def password(rng: Optional[random.Random] = None) -> str:
    # Accounts require at least 10 characters.
    return alpha_numeric(16, rng)


def pick(seq: Sequence[T], rng: Optional[random.Random] = None) -> T:
    return (rng or _rng).choice(seq)


def sample(seq: Sequence[T], k: int, rng: Optional[random.Random] = None) -> list[T]:
    return (rng or _rng).sample(list(seq), k)
