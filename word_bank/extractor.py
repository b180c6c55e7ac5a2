"""Turn a target phrase (or an ordered id list) into correct semantic units."""
from __future__ import annotations

import logging

from word_bank.models import GenerationRequest, SemanticUnit, VocabularyEntry
from word_bank.normalizer import display_token, match_key, normalize_for_match, normalize_gloss, tokenize
from word_bank.phrases import detect_phrases
from word_bank.semantic_groups import SemanticGroupIndex, resolve_group

_log = logging.getLogger("word_bank.extract")


def units_from_text(
    target_text: str,
    vocabulary: list[VocabularyEntry],
    index: SemanticGroupIndex | None = None,
) -> list[SemanticUnit]:
    """Walk the target tokens in order, preferring phrases over single words.

    Unmatched tokens go through the contextual mapping table and finally fall
    back to the literal expected token, so no expected content is lost.
    """
    index = index or SemanticGroupIndex()
    tokens = tokenize(target_text)
    if not tokens:
        return []

    matches = detect_phrases(tokens, vocabulary, index=index)
    phrase_ids = set(matches.consumed_ids)
    consumed = set(matches.consumed_ids)
    by_id = {e.id: e for e in vocabulary}
    variants = {e.id: normalize_for_match(e.gloss) for e in vocabulary}

    units: list[SemanticUnit] = []
    pos = 0
    while pos < len(tokens):
        span = matches.span_at(pos)
        if span is not None:
            units.append(span.unit)
            pos += span.length
            continue

        token = tokens[pos]
        pos += 1
        key = match_key(token)
        text = display_token(token)

        candidates = [e for e in vocabulary if key in variants[e.id]]
        entry = next((e for e in candidates if e.id not in consumed), None)
        if entry is not None:
            units.append(SemanticUnit(
                text=text,
                is_phrase=False,
                source_vocab_id=entry.id,
                semantic_group=resolve_group(entry, index),
            ))
            consumed.add(entry.id)
            continue

        # Already covered by a phrase elsewhere in the answer
        if candidates and all(e.id in phrase_ids for e in candidates):
            _log.debug("Skipping %r: covered by phrase %s", token,
                       ", ".join(e.id for e in candidates))
            continue

        mapped = next(
            (by_id[i] for i in index.contextual_ids(key)
             if i in by_id and i not in consumed),
            None,
        )
        if mapped is not None:
            units.append(SemanticUnit(
                text=text,
                is_phrase=False,
                source_vocab_id=mapped.id,
                semantic_group=resolve_group(mapped, index),
            ))
            consumed.add(mapped.id)
            continue

        _log.debug("No vocabulary match for %r, using literal text", token)
        units.append(SemanticUnit(text=text, is_phrase=False))

    return units


def units_from_ids(
    ordered_vocab_ids: list[str],
    vocabulary: list[VocabularyEntry],
    index: SemanticGroupIndex | None = None,
) -> list[SemanticUnit]:
    index = index or SemanticGroupIndex()
    by_id = {e.id: e for e in vocabulary}
    units: list[SemanticUnit] = []
    for vocab_id in ordered_vocab_ids:
        entry = by_id.get(vocab_id)
        if entry is None:
            _log.warning("Unknown vocabulary id in sequence: %s", vocab_id)
            continue
        text = normalize_gloss(entry.gloss)
        if not text:
            continue
        units.append(SemanticUnit(
            text=text,
            is_phrase=len(text.split()) > 1,
            source_vocab_id=entry.id,
            semantic_group=resolve_group(entry, index),
        ))
    return units


def extract_units(request: GenerationRequest, index: SemanticGroupIndex | None = None) -> list[SemanticUnit]:
    """Correct units for *request*; ``target_text`` wins over ``ordered_vocab_ids``."""
    if request.target_text:
        return units_from_text(request.target_text, request.vocabulary, index)
    if request.ordered_vocab_ids:
        return units_from_ids(request.ordered_vocab_ids, request.vocabulary, index)
    return []


def count_semantic_units(request: GenerationRequest, index: SemanticGroupIndex | None = None) -> int:
    """Number of answer tiles the learner must place (phrases count once)."""
    return len(extract_units(request, index))
