"""Remove distractors that would make a word bank ambiguous or leak the answer.

A distractor is rejected when its match key:

* equals a correct phrase, or a 2-/3-token piece of one in either word order
  ("are you" / "you are" when "How are you" is correct);
* is a single word already inside a correct multi-word unit ("good" when
  "I'm good" is correct);
* belongs to the same synonym cluster as a correct unit ("Hi" when "Hello"
  is correct);
* duplicates a correct unit or an earlier accepted distractor.

Correct units are never removed.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from word_bank.models import SemanticUnit
from word_bank.normalizer import match_key
from word_bank.semantic_groups import SemanticGroupIndex

_log = logging.getLogger("word_bank.filter")

SUB_PHRASE_SIZES = (2, 3)


def sub_phrases(key: str) -> set[str]:
    """Contiguous 2- and 3-word pieces of *key* and their reversals."""
    words = key.split()
    pieces: set[str] = set()
    for size in SUB_PHRASE_SIZES:
        for start in range(len(words) - size + 1):
            piece = words[start:start + size]
            pieces.add(" ".join(piece))
            pieces.add(" ".join(reversed(piece)))
    return pieces


class RedundancyFilter:
    def __init__(self, correct: list[SemanticUnit], index: SemanticGroupIndex | None = None):
        self.index = index or SemanticGroupIndex()
        self.correct_keys = [match_key(u.text) for u in correct]
        self.phrase_pieces: set[str] = set()
        self.phrase_words: set[str] = set()
        self.synonym_keys: set[str] = set()
        for key in self.correct_keys:
            words = key.split()
            if len(words) > 1:
                self.phrase_pieces.add(key)
                self.phrase_pieces.update(sub_phrases(key))
                self.phrase_words.update(words)
            cluster = self.index.synonym_cluster(key)
            if cluster:
                self.synonym_keys.update(cluster - {key})

    def reason(self, unit: SemanticUnit, accepted_keys: Iterable[str] = ()) -> str | None:
        """Why *unit* must not be offered as a distractor, or ``None`` if it may."""
        key = match_key(unit.text)
        if not key:
            return "empty text"
        if key in self.correct_keys:
            return "duplicates a correct answer"
        if key in self.phrase_pieces:
            return "sub-phrase of a correct phrase"
        if len(unit.text.split()) == 1 and all(w in self.phrase_words for w in key.split()):
            return "word inside a correct phrase"
        if key in self.synonym_keys:
            return "synonym of a correct answer"
        if key in set(accepted_keys):
            return "duplicate distractor"
        return None

    def filter(
        self,
        distractors: list[SemanticUnit],
        accepted: list[SemanticUnit] | None = None,
    ) -> tuple[list[SemanticUnit], list[SemanticUnit]]:
        """Split *distractors* into (kept, rejected).

        *accepted* are distractors kept by an earlier pass; new ones must not
        duplicate them.
        """
        accepted_keys = {match_key(u.text) for u in accepted or ()}
        kept: list[SemanticUnit] = []
        rejected: list[SemanticUnit] = []
        for unit in distractors:
            why = self.reason(unit, accepted_keys)
            if why:
                _log.debug("Dropping distractor %r: %s", unit.text, why)
                rejected.append(unit)
                continue
            kept.append(unit)
            accepted_keys.add(match_key(unit.text))
        return kept, rejected
