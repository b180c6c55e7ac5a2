"""Shared test fixtures."""
from __future__ import annotations

import random

import pytest

from word_bank.models import SemanticUnit, VocabularyEntry
from word_bank.semantic_groups import SemanticGroupIndex


@pytest.fixture
def index():
    return SemanticGroupIndex()


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def greeting_vocab():
    """Lesson-one vocabulary with explicit semantic groups."""
    return [
        VocabularyEntry("salam", "Hello", "greetings"),
        VocabularyEntry("chetori", "How are you", "greetings"),
        VocabularyEntry("khoobam", "I'm good", "responses"),
        VocabularyEntry("merci", "Thank you", "responses"),
        VocabularyEntry("man", "I / Me", "pronouns"),
        VocabularyEntry("shoma", "You", "pronouns"),
    ]


@pytest.fixture
def module_vocab():
    """A module-sized corpus; groups come from the static group table."""
    return [
        VocabularyEntry("salam", "Hello"),
        VocabularyEntry("chetori", "How are you?"),
        VocabularyEntry("khosh_amadid", "Welcome"),
        VocabularyEntry("khodafez", "Goodbye"),
        VocabularyEntry("khoshbakhtam", "Nice to meet you"),
        VocabularyEntry("khoobam", "I'm good"),
        VocabularyEntry("merci", "Thank you"),
        VocabularyEntry("baleh", "Yes"),
        VocabularyEntry("na", "No"),
        VocabularyEntry("man", "I / Me"),
        VocabularyEntry("shoma", "You"),
        VocabularyEntry("esm", "Name"),
        VocabularyEntry("zendegi", "Life"),
        VocabularyEntry("amrika", "America"),
        VocabularyEntry("dar", "In"),
        VocabularyEntry("mikonam", "I do"),
        VocabularyEntry("va", "And"),
        VocabularyEntry("vali", "But"),
        VocabularyEntry("koja", "Where"),
        VocabularyEntry("chi", "What"),
        VocabularyEntry("madar", "Mother"),
        VocabularyEntry("pedar", "Father"),
    ]


@pytest.fixture
def hello_unit():
    return SemanticUnit("Hello", False, "salam", "greetings")


@pytest.fixture
def vocab_md_content():
    """Minimal lesson vocabulary markdown for parser testing."""
    return """\
# Module 1

---

## Greetings

| Id | English |
|----|---------|
| **salam** | Hello |
| **chetori** | How are you? |

---

## 2. Personal Pronouns

| Id | English |
|----|---------|
| **man** | I / Me |
| **shoma** | You |

---

## Misc

| Id | English | Group |
|----|---------|-------|
| **dar** | In | prepositions |
| **va** | And | connectors |
"""
