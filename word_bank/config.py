from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from word_bank.semantic_groups import SemanticGroupIndex

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "distractor_strategy": "semantic",
    "min_bank_size": 7,
    "max_bank_size": 13,
    "same_group_ratio": 0.7,
    "vocab_files": [],
    "semantic_groups_file": "",
    "seed": None,
    "host": "127.0.0.1",
    "port": 8766,
}


@dataclass
class Settings:
    distractor_strategy: str = DEFAULTS["distractor_strategy"]
    min_bank_size: int = DEFAULTS["min_bank_size"]
    max_bank_size: int = DEFAULTS["max_bank_size"]
    same_group_ratio: float = DEFAULTS["same_group_ratio"]
    vocab_files: list[str] = field(default_factory=lambda: list(DEFAULTS["vocab_files"]))
    semantic_groups_file: str = DEFAULTS["semantic_groups_file"]
    seed: int | None = DEFAULTS["seed"]
    host: str = DEFAULTS["host"]
    port: int = DEFAULTS["port"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def data_dir(self) -> Path:
        return self.project_root / "data"

    def resolved_vocab_files(self) -> list[Path]:
        if self.vocab_files:
            root = self.project_root
            return [root / f for f in self.vocab_files]
        return sorted(self.data_dir.glob("*.md"))

    def to_dict(self) -> dict:
        return {
            "distractor_strategy": self.distractor_strategy,
            "min_bank_size": self.min_bank_size,
            "max_bank_size": self.max_bank_size,
            "same_group_ratio": self.same_group_ratio,
            "vocab_files": self.vocab_files,
            "semantic_groups_file": self.semantic_groups_file,
            "seed": self.seed,
            "host": self.host,
            "port": self.port,
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")


def load_semantic_index(settings: Settings) -> SemanticGroupIndex:
    """Group table from ``semantic_groups_file`` if set, else the built-in one."""
    if settings.semantic_groups_file:
        path = Path(settings.semantic_groups_file)
        if not path.is_absolute():
            path = settings.project_root / path
        return SemanticGroupIndex.from_file(path)
    return SemanticGroupIndex()
