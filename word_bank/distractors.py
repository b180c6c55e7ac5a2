"""Distractor sampling biased toward the semantic groups of the answer."""
from __future__ import annotations

import logging
import random
from collections.abc import Iterable

from word_bank.models import SemanticUnit, VocabularyEntry
from word_bank.normalizer import match_key, normalize_for_match, normalize_gloss
from word_bank.semantic_groups import SemanticGroupIndex, resolve_group

_log = logging.getLogger("word_bank.sampler")

# Share of distractors drawn from the answer's own groups; the rest come
# from related groups, then from anywhere in the corpus.
SAME_GROUP_RATIO = 0.7


def _unique(values: Iterable[str | None]) -> list[str]:
    seen: list[str] = []
    for v in values:
        if v and v not in seen:
            seen.append(v)
    return seen


def _to_unit(entry: VocabularyEntry, index: SemanticGroupIndex) -> SemanticUnit:
    text = normalize_gloss(entry.gloss)
    return SemanticUnit(
        text=text,
        is_phrase=len(text.split()) > 1,
        source_vocab_id=entry.id,
        semantic_group=resolve_group(entry, index),
    )


def eligible_entries(
    correct: list[SemanticUnit],
    vocabulary: list[VocabularyEntry],
    exclude_ids: Iterable[str] = (),
) -> list[VocabularyEntry]:
    """Corpus entries that are not part of the answer, in corpus order."""
    excluded = set(exclude_ids)
    excluded.update(u.source_vocab_id for u in correct if u.source_vocab_id)
    correct_keys = {match_key(u.text) for u in correct}
    pool: list[VocabularyEntry] = []
    seen_ids: set[str] = set()
    for entry in vocabulary:
        if entry.id in excluded or entry.id in seen_ids:
            continue
        if not normalize_gloss(entry.gloss):
            continue
        if correct_keys.intersection(normalize_for_match(entry.gloss)):
            continue
        seen_ids.add(entry.id)
        pool.append(entry)
    return pool


def sample_distractors(
    correct: list[SemanticUnit],
    vocabulary: list[VocabularyEntry],
    count: int,
    strategy: str = "semantic",
    index: SemanticGroupIndex | None = None,
    rng: random.Random | None = None,
    exclude_ids: Iterable[str] = (),
    same_group_ratio: float = SAME_GROUP_RATIO,
) -> list[SemanticUnit]:
    """Draw up to *count* distractor units.

    ``semantic``: ⌊ratio × count⌋ from the answer's groups (group order, then
    corpus order), the remainder from related groups, then a uniform random
    fill.  ``random``: uniform random fill only.  May return fewer than
    *count* when the corpus runs out.
    """
    if count <= 0:
        return []
    index = index or SemanticGroupIndex()
    rng = rng or random.Random()
    pool = eligible_entries(correct, vocabulary, exclude_ids)
    picked: list[VocabularyEntry] = []

    if strategy == "semantic":
        groups = _unique(u.semantic_group for u in correct)
        same_quota = int(count * same_group_ratio)
        for group in groups:
            for entry in pool:
                if len(picked) >= same_quota:
                    break
                if entry not in picked and resolve_group(entry, index) == group:
                    picked.append(entry)
        same_added = len(picked)

        related = _unique(r for g in groups for r in index.related_groups(g))
        for group in related:
            for entry in pool:
                if len(picked) >= count:
                    break
                if entry not in picked and resolve_group(entry, index) == group:
                    picked.append(entry)
        _log.debug("Semantic distractors: %d same-group, %d related (groups: %s)",
                   same_added, len(picked) - same_added, ", ".join(groups) or "none")

    remaining = [e for e in pool if e not in picked]
    need = min(count - len(picked), len(remaining))
    if need > 0:
        picked.extend(rng.sample(remaining, need))

    if len(picked) < count:
        _log.info("Corpus exhausted: %d of %d distractors available", len(picked), count)
    return [_to_unit(e, index) for e in picked]
