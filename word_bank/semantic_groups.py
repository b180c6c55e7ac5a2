"""Semantic group table used to bias distractor selection.

Holds four pieces of curriculum data:

* ``groups``: group name → vocabulary ids in that group
* ``related``: group name → neighbouring groups (used for the 30% share)
* ``synonyms``: small closed clusters of interchangeable glosses
* ``contextual``: pronoun/possessive surface forms → vocabulary ids

The built-in tables describe the first module of the course; a JSON file with
the same keys replaces any of them (see ``Settings.semantic_groups_file``).
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from word_bank.normalizer import match_key

DEFAULT_GROUPS: dict[str, list[str]] = {
    "greetings": ["salam", "chetori", "khosh_amadid", "khodafez", "khoshbakhtam"],
    "responses": ["khoobam", "khoobi", "merci", "baleh", "na"],
    "pronouns": ["man", "shoma"],
    "questions": ["chi", "chiye", "koja"],
    "adjectives": ["khoob", "kheily"],
    "verbs": ["hast", "neest", "hastam", "neestam", "neesti", "hasti", "mikonam", "mikoni"],
    "nouns": ["esm", "esme", "zendegi", "madar", "pedar", "baradar", "khahar", "amrika", "in"],
    "prepositions": ["ahle", "dar"],
    "connectors": ["va", "ham", "vali"],
    "possessives": ["esmam", "esmet"],
}

DEFAULT_RELATED: dict[str, list[str]] = {
    "greetings": ["responses"],
    "responses": ["greetings"],
    "pronouns": ["verbs"],
    "verbs": ["pronouns"],
    "questions": ["responses"],
    "adjectives": ["verbs"],
    "nouns": ["possessives"],
    "prepositions": ["nouns"],
    "connectors": ["verbs"],
    "possessives": ["nouns"],
}

DEFAULT_SYNONYMS: list[list[str]] = [
    ["hello", "hi", "salam"],
]

DEFAULT_CONTEXTUAL: dict[str, list[str]] = {
    "i": ["man"],
    "me": ["man"],
    "my": ["man"],
    "you": ["shoma"],
    "your": ["shoma"],
}


@dataclass
class SemanticGroupIndex:
    groups: dict[str, list[str]] = field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_GROUPS.items()})
    related: dict[str, list[str]] = field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_RELATED.items()})
    synonyms: list[list[str]] = field(default_factory=lambda: [list(c) for c in DEFAULT_SYNONYMS])
    contextual: dict[str, list[str]] = field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_CONTEXTUAL.items()})

    def __post_init__(self):
        self._group_by_id: dict[str, str] = {}
        for group, ids in self.groups.items():
            for vocab_id in ids:
                self._group_by_id.setdefault(vocab_id, group)
        self._cluster_by_key: dict[str, frozenset[str]] = {}
        for cluster in self.synonyms:
            keys = frozenset(k for k in (match_key(w) for w in cluster) if k)
            for key in keys:
                self._cluster_by_key[key] = keys

    @classmethod
    def from_file(cls, path: Path) -> SemanticGroupIndex:
        """Load a group table from JSON; missing keys fall back to the defaults."""
        try:
            raw = json.loads(Path(path).read_text())
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid semantic group file {path}: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError(f"Semantic group file {path} must contain a JSON object")
        known = {"groups", "related", "synonyms", "contextual"}
        tables = {k: v for k, v in raw.items() if k in known}
        problem = _table_problem(tables)
        if problem:
            raise ValueError(f"Invalid semantic group file {path}: {problem}")
        return cls(**tables)

    def group_of(self, vocab_id: str | None) -> str | None:
        if vocab_id is None:
            return None
        return self._group_by_id.get(vocab_id)

    def related_groups(self, group: str) -> list[str]:
        return list(self.related.get(group, []))

    def ids_in_group(self, group: str) -> list[str]:
        return list(self.groups.get(group, []))

    def synonym_cluster(self, key: str) -> frozenset[str] | None:
        """Synonym cluster containing match key *key*, if any."""
        return self._cluster_by_key.get(key)

    def contextual_ids(self, key: str) -> list[str]:
        return list(self.contextual.get(key, []))

    def to_dict(self) -> dict:
        return {
            "groups": self.groups,
            "related": self.related,
            "synonyms": self.synonyms,
            "contextual": self.contextual,
        }


def _is_str_list(value) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def _table_problem(tables: dict) -> str | None:
    """Describe the first malformed table in *tables*, or None if all are valid."""
    for key in ("groups", "related", "contextual"):
        if key not in tables:
            continue
        table = tables[key]
        if not isinstance(table, dict):
            return f"'{key}' must be an object of string lists"
        for name, ids in table.items():
            if not _is_str_list(ids):
                return f"'{key}.{name}' must be a list of strings"
    if "synonyms" in tables:
        clusters = tables["synonyms"]
        if not isinstance(clusters, list) or not all(_is_str_list(c) for c in clusters):
            return "'synonyms' must be a list of string lists"
    return None


def resolve_group(entry, index: SemanticGroupIndex) -> str | None:
    """Group of a vocabulary entry: its own tag first, then the static table."""
    return entry.semantic_group or index.group_of(entry.id)
