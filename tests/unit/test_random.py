"""Unit tests for random payload helpers."""
import random as stdlib_random

import pytest

from harness import random


@pytest.mark.unit
class TestRandomPayloads:
    def test_alpha_numeric_length_and_alphabet(self):
        value = random.alpha_numeric(12)
        assert len(value) == 12
        assert all(c in random.ALPHA_NUMERIC for c in value)

    def test_name_word_count(self):
        assert len(random.name(3).split(" ")) == 3

    def test_paragraph_sentences(self):
        text = random.paragraph(4)
        assert text.count(".") == 4
        assert text[0].isupper()

    def test_content_paragraphs(self):
        assert len(random.content(paragraphs=2).split("\n\n")) == 2

    def test_email_and_password(self):
        assert random.email().endswith("@example.com")
        assert len(random.password()) >= 10

    def test_seeded_rng_is_reproducible(self):
        a = random.paragraph(2, rng=stdlib_random.Random(7))
        b = random.paragraph(2, rng=stdlib_random.Random(7))
        assert a == b

    def test_pick_and_sample(self):
        items = ["like", "dislike"]
        assert random.pick(items) in items
        assert sorted(random.sample(items, 2)) == sorted(items)

    def test_uuid_is_unique(self):
        assert random.uuid() != random.uuid()
