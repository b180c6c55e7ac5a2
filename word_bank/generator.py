"""Assemble a shuffled word bank for sequence-building exercises.

Pipeline: extract correct units → size the bank → sample distractors →
drop redundant distractors (topping up from the corpus while it lasts) →
sentence-case every tile → shuffle.
"""
from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from word_bank.distractors import SAME_GROUP_RATIO, sample_distractors
from word_bank.extractor import extract_units
from word_bank.models import GenerationRequest, GenerationResult, SemanticUnit, WordBankItem
from word_bank.normalizer import match_key
from word_bank.redundancy import RedundancyFilter
from word_bank.semantic_groups import SemanticGroupIndex

if TYPE_CHECKING:
    from word_bank.config import Settings

_log = logging.getLogger("word_bank.bank")

MIN_BANK_SIZE = 7
MAX_BANK_SIZE = 13


def calculate_word_bank_size(
    correct_count: int,
    minimum: int = MIN_BANK_SIZE,
    maximum: int = MAX_BANK_SIZE,
) -> int:
    """Bank size for *correct_count* answer tiles: 2n + 3, clamped."""
    return min(max(correct_count * 2 + 3, minimum), maximum)


def normalize_case(text: str) -> str:
    """Sentence case: first letter capitalized, the rest lower, "I" always upper."""
    if not text:
        return text
    out = []
    for i, word in enumerate(text.split(" ")):
        lower = word.lower()
        if lower == "i" or lower.startswith("i'"):
            out.append("I" + lower[1:])
        elif i == 0:
            first = next((n for n, ch in enumerate(lower) if ch.isalpha()), 0)
            out.append(lower[:first] + lower[first:first + 1].upper() + lower[first + 1:])
        else:
            out.append(lower)
    return " ".join(out)


def shuffle(items: list, rng: random.Random | None = None) -> list:
    """Fisher–Yates shuffle into a new list."""
    shuffled = list(items)
    (rng or random).shuffle(shuffled)
    return shuffled


def _collect_distractors(
    request: GenerationRequest,
    correct: list[SemanticUnit],
    count: int,
    index: SemanticGroupIndex,
    rng: random.Random,
    same_group_ratio: float,
) -> list[SemanticUnit]:
    """Sample and filter until *count* distractors survive or the corpus runs dry."""
    flt = RedundancyFilter(correct, index)
    accepted: list[SemanticUnit] = []
    rejected_ids: set[str] = set()
    while len(accepted) < count:
        seen = rejected_ids | {u.source_vocab_id for u in accepted if u.source_vocab_id}
        batch = sample_distractors(
            correct,
            request.vocabulary,
            count - len(accepted),
            strategy=request.distractor_strategy,
            index=index,
            rng=rng,
            exclude_ids=seen,
            same_group_ratio=same_group_ratio,
        )
        if not batch:
            break
        kept, rejected = flt.filter(batch, accepted)
        accepted.extend(kept)
        rejected_ids.update(u.source_vocab_id for u in rejected if u.source_vocab_id)
    return accepted


def generate_word_bank(
    request: GenerationRequest,
    index: SemanticGroupIndex | None = None,
    rng: random.Random | None = None,
    settings: Settings | None = None,
) -> GenerationResult:
    """Build the word bank for *request*.

    Never raises for content problems: unmatched words fall back to their
    literal text and a thin corpus just yields a smaller bank.
    """
    index = index or SemanticGroupIndex()
    rng = rng or random.Random()
    minimum = settings.min_bank_size if settings else MIN_BANK_SIZE
    maximum = settings.max_bank_size if settings else MAX_BANK_SIZE
    ratio = settings.same_group_ratio if settings else SAME_GROUP_RATIO

    correct = extract_units(request, index)
    if not correct:
        _log.info("No correct units extracted; returning empty bank")
        return GenerationResult()

    target_size = request.max_size or calculate_word_bank_size(len(correct), minimum, maximum)
    count = max(0, target_size - len(correct))
    distractors = _collect_distractors(request, correct, count, index, rng, ratio)

    correct_words = [normalize_case(u.text) for u in correct]
    distractor_words = [normalize_case(u.text) for u in distractors]
    items = [WordBankItem.from_unit(u, True, w) for u, w in zip(correct, correct_words)]
    items += [WordBankItem.from_unit(u, False, w) for u, w in zip(distractors, distractor_words)]

    _log.info("Word bank: %d correct, %d/%d distractors (%s)",
              len(correct_words), len(distractor_words), count, request.distractor_strategy)
    return GenerationResult(
        correct_words=correct_words,
        distractors=distractor_words,
        all_options=shuffle(correct_words + distractor_words, rng),
        items=items,
    )


def check_answer(correct_words: list[str], submitted: list[str]) -> bool:
    """Whether a learner's ordered tile selection rebuilds the answer.

    Comparison is by match key, so case, punctuation and contractions
    ("I'm" vs "I am") do not matter.
    """
    if len(correct_words) != len(submitted):
        return False
    return all(match_key(c) == match_key(s) for c, s in zip(correct_words, submitted))
