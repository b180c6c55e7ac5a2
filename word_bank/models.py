from __future__ import annotations

from dataclasses import asdict, dataclass, field

STRATEGIES = ("semantic", "random")


@dataclass(frozen=True)
class VocabularyEntry:
    id: str
    gloss: str  # English meaning, may hold slash variants ("I / Me")
    semantic_group: str | None = None


@dataclass
class SemanticUnit:
    text: str
    is_phrase: bool
    source_vocab_id: str | None = None  # None for literal fallback units
    semantic_group: str | None = None


@dataclass
class WordBankItem:
    text: str
    is_phrase: bool
    is_correct: bool
    source_vocab_id: str | None = None
    semantic_group: str | None = None

    @classmethod
    def from_unit(cls, unit: SemanticUnit, is_correct: bool, text: str | None = None) -> WordBankItem:
        return cls(
            text=unit.text if text is None else text,
            is_phrase=unit.is_phrase,
            is_correct=is_correct,
            source_vocab_id=unit.source_vocab_id,
            semantic_group=unit.semantic_group,
        )


@dataclass
class GenerationRequest:
    vocabulary: list[VocabularyEntry]
    target_text: str | None = None
    ordered_vocab_ids: list[str] | None = None
    max_size: int | None = None
    distractor_strategy: str = "semantic"  # semantic | random

    def __post_init__(self):
        if self.distractor_strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown distractor strategy: {self.distractor_strategy!r} "
                f"(expected one of {', '.join(STRATEGIES)})"
            )
        if self.max_size is not None and self.max_size < 0:
            raise ValueError(f"max_size must be non-negative (got {self.max_size})")


@dataclass
class GenerationResult:
    correct_words: list[str] = field(default_factory=list)
    distractors: list[str] = field(default_factory=list)
    all_options: list[str] = field(default_factory=list)
    items: list[WordBankItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "correct_words": self.correct_words,
            "distractors": self.distractors,
            "all_options": self.all_options,
            "items": [asdict(item) for item in self.items],
        }
