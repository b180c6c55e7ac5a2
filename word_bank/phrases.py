"""Greedy multi-word phrase detection over a tokenized target phrase."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from word_bank.models import SemanticUnit, VocabularyEntry
from word_bank.normalizer import display_token, match_key, normalize_for_match
from word_bank.semantic_groups import SemanticGroupIndex, resolve_group

_log = logging.getLogger("word_bank.phrases")

# Longest windows first so a 2-word gloss cannot pre-empt a 3-word one.
WINDOW_SIZES = (3, 2)


@dataclass
class PhraseSpan:
    start: int
    length: int
    unit: SemanticUnit


@dataclass
class PhraseMatches:
    spans: list[PhraseSpan] = field(default_factory=list)
    consumed_ids: set[str] = field(default_factory=set)
    claimed: set[int] = field(default_factory=set)

    def span_at(self, position: int) -> PhraseSpan | None:
        for span in self.spans:
            if span.start == position:
                return span
        return None

    @property
    def units(self) -> list[SemanticUnit]:
        return [s.unit for s in sorted(self.spans, key=lambda s: s.start)]


def detect_phrases(
    tokens: list[str],
    vocabulary: list[VocabularyEntry],
    consumed: set[str] | None = None,
    index: SemanticGroupIndex | None = None,
) -> PhraseMatches:
    """Claim 3- then 2-token windows of *tokens* that equal a vocabulary gloss.

    Every unconsumed entry is compared by match key (contractions expanded,
    punctuation stripped, any slash variant).  The first entry that matches a
    window wins; there is no backtracking.  *consumed* is not modified.
    """
    index = index or SemanticGroupIndex()
    result = PhraseMatches(consumed_ids=set(consumed or ()))
    variants = {e.id: normalize_for_match(e.gloss) for e in vocabulary}

    for size in WINDOW_SIZES:
        for start in range(len(tokens) - size + 1):
            positions = range(start, start + size)
            if any(p in result.claimed for p in positions):
                continue
            window = tokens[start:start + size]
            key = match_key(" ".join(window))
            if not key:
                continue
            entry = next(
                (e for e in vocabulary
                 if e.id not in result.consumed_ids and key in variants[e.id]),
                None,
            )
            if entry is None:
                continue
            unit = SemanticUnit(
                text=" ".join(display_token(t) for t in window),
                is_phrase=True,
                source_vocab_id=entry.id,
                semantic_group=resolve_group(entry, index),
            )
            result.spans.append(PhraseSpan(start, size, unit))
            result.claimed.update(positions)
            result.consumed_ids.add(entry.id)
            _log.debug("Phrase %r at %d matched %s", unit.text, start, entry.id)

    return result
