"""CLI entry point for word-bank.

Usage:
  uv run python -m word_bank serve [--host HOST] [--port PORT]
  uv run python -m word_bank generate TEXT [--max-size N] [--strategy S] [--seed N]
  uv run python -m word_bank generate --ids salam,chetori [--max-size N] ...
  uv run python -m word_bank units TEXT
  uv run python -m word_bank groups
  uv run python -m word_bank vocab
"""
from __future__ import annotations

import json
import sys


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "generate":
        _generate(args[1:])
    elif command == "units":
        _units(args[1:])
    elif command == "groups":
        _groups()
    elif command == "vocab":
        _vocab()
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, generate, units, groups, vocab")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str | None) -> str | None:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _positional(args: list[str]) -> str:
    """Words that are neither flags nor flag values, joined as the target text."""
    words = []
    skip = False
    for a in args:
        if skip:
            skip = False
            continue
        if a.startswith("--"):
            skip = True
            continue
        words.append(a)
    return " ".join(words)


def _load():
    from word_bank.config import load_semantic_index, load_settings
    from word_bank.parsers.vocabulary_parser import load_vocabulary_files

    settings = load_settings()
    vocabulary = load_vocabulary_files(settings.resolved_vocab_files())
    return settings, load_semantic_index(settings), vocabulary


def _request(args: list[str], vocabulary, settings):
    from word_bank.models import GenerationRequest

    ids = _parse_flag(args, "--ids", None)
    max_size = _parse_flag(args, "--max-size", None)
    try:
        return GenerationRequest(
            vocabulary=vocabulary,
            target_text=_positional(args) or None,
            ordered_vocab_ids=[i.strip() for i in ids.split(",") if i.strip()] if ids else None,
            max_size=int(max_size) if max_size else None,
            distractor_strategy=_parse_flag(args, "--strategy", settings.distractor_strategy),
        )
    except ValueError as e:
        print(f"Invalid request: {e}")
        sys.exit(1)


def _serve(args: list[str]):
    import uvicorn

    from word_bank.config import load_settings

    settings = load_settings()
    port = int(_parse_flag(args, "--port", str(settings.port)))
    host = _parse_flag(args, "--host", settings.host)
    print(f"Starting Word Bank on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    uvicorn.run(
        "word_bank.app:app",
        host=host,
        port=port,
        reload=False,
        timeout_graceful_shutdown=5,
    )


def _generate(args: list[str]):
    import random

    from word_bank.generator import generate_word_bank

    settings, index, vocabulary = _load()
    request = _request(args, vocabulary, settings)
    if not request.target_text and not request.ordered_vocab_ids:
        print("Nothing to generate: pass a target phrase or --ids.")
        sys.exit(1)

    seed = _parse_flag(args, "--seed", None)
    try:
        rng = random.Random(int(seed) if seed is not None else settings.seed)
    except ValueError as e:
        print(f"Invalid request: {e}")
        sys.exit(1)
    result = generate_word_bank(request, index=index, rng=rng, settings=settings)

    print(f"Answer:      {' | '.join(result.correct_words)}")
    print(f"Distractors: {' | '.join(result.distractors) or '(none)'}")
    print(f"Word bank ({len(result.all_options)}):")
    for option in result.all_options:
        print(f"  [ {option} ]")


def _units(args: list[str]):
    from word_bank.extractor import extract_units

    settings, index, vocabulary = _load()
    request = _request(args, vocabulary, settings)
    units = extract_units(request, index)
    for u in units:
        kind = "phrase" if u.is_phrase else "word"
        source = u.source_vocab_id or "(literal)"
        print(f"  {u.text:24s} {kind:7s} {source:16s} {u.semantic_group or '-'}")
    print(f"\n{len(units)} semantic units")


def _groups():
    _, index, _ = _load()
    print(json.dumps(index.to_dict(), indent=2))


def _vocab():
    settings, index, vocabulary = _load()
    print(f"{len(vocabulary)} entries from {len(settings.resolved_vocab_files())} file(s)")
    for e in vocabulary:
        group = e.semantic_group or index.group_of(e.id) or "-"
        print(f"  {e.id:16s} {e.gloss:24s} {group}")


if __name__ == "__main__":
    main()
