"""Parse lesson vocabulary markdown into VocabularyEntry objects.

Handles two table schemas:
  | Id | English |            (group taken from the section header)
  | Id | English | Group |    (explicit group column wins)

Section headers: ``## Greetings``, ``## 3. Question Words`` → ``greetings``,
``question_words``.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path

from word_bank.models import VocabularyEntry

_log = logging.getLogger("word_bank.parser")


def _slug(title: str) -> str:
    title = re.sub(r"^\d+\.\s*", "", title.strip())
    return re.sub(r"[^a-z0-9]+", "_", title.lower()).strip("_")


def parse_vocabulary_text(text: str) -> list[VocabularyEntry]:
    entries: list[VocabularyEntry] = []
    current_group: str | None = None

    for line in text.splitlines():
        m = re.match(r"^## (.+)", line)
        if m:
            current_group = _slug(m.group(1)) or None
            continue

        if not line.startswith("|"):
            continue

        # Table rows with bold id: | **salam** | Hello | greetings |
        m = re.match(r"\|\s*\*\*(.+?)\*\*\s*\|(.*)", line)
        if not m:
            continue
        cells = [c.strip() for c in m.group(2).split("|")]
        cells = [c for c in cells if c]
        if not cells:
            continue
        group = _slug(cells[1]) if len(cells) > 1 else current_group
        entries.append(VocabularyEntry(
            id=m.group(1).strip(),
            gloss=cells[0],
            semantic_group=group or None,
        ))

    return entries


def parse_vocabulary_file(path: Path) -> list[VocabularyEntry]:
    return parse_vocabulary_text(path.read_text())


def load_vocabulary_files(paths: list[Path]) -> list[VocabularyEntry]:
    """Concatenate the corpora of every existing file in *paths*."""
    entries: list[VocabularyEntry] = []
    for vf in paths:
        if not vf.exists():
            _log.warning("Vocabulary file not found: %s", vf)
            continue
        parsed = parse_vocabulary_file(vf)
        _log.info("Loaded %d entries from %s", len(parsed), vf.name)
        entries.extend(parsed)
    return entries


def build_vocabulary(
    ids: list[str],
    glosses: list[str],
    groups: list[str | None] | None = None,
) -> list[VocabularyEntry]:
    """Build a corpus from parallel lists, as lesson configs declare it."""
    if len(glosses) != len(ids) or (groups is not None and len(groups) != len(ids)):
        raise ValueError(
            "All vocabulary lists must have the same length: "
            f"ids: {len(ids)}, glosses: {len(glosses)}"
            + (f", groups: {len(groups)}" if groups is not None else "")
        )
    return [
        VocabularyEntry(id=i, gloss=g, semantic_group=groups[n] if groups else None)
        for n, (i, g) in enumerate(zip(ids, glosses))
    ]
