"""FastAPI application exposing word bank generation."""
from __future__ import annotations

import logging
import random
from dataclasses import asdict

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, HTTPException, Request

from word_bank.config import Settings, load_semantic_index, load_settings
from word_bank.extractor import extract_units
from word_bank.generator import check_answer, generate_word_bank
from word_bank.models import GenerationRequest, VocabularyEntry
from word_bank.parsers.vocabulary_parser import load_vocabulary_files
from word_bank.semantic_groups import SemanticGroupIndex

app = FastAPI(title="Word Bank")
_log = logging.getLogger("word_bank.api")

# Global state (initialized at startup)
_settings: Settings | None = None
_index: SemanticGroupIndex | None = None
_vocabulary: list[VocabularyEntry] = []


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


def get_index() -> SemanticGroupIndex:
    assert _index is not None
    return _index


@app.on_event("startup")
async def startup():
    global _settings, _index, _vocabulary
    if _settings is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()
    _index = load_semantic_index(_settings)
    _vocabulary = load_vocabulary_files(_settings.resolved_vocab_files())


def _parse_vocabulary(raw) -> list[VocabularyEntry]:
    if not isinstance(raw, list):
        raise HTTPException(400, "vocabulary must be a list")
    entries = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or not item.get("id") or "gloss" not in item:
            raise HTTPException(400, f"vocabulary[{i}] needs 'id' and 'gloss'")
        entries.append(VocabularyEntry(
            id=str(item["id"]),
            gloss=str(item["gloss"]),
            semantic_group=item.get("semantic_group"),
        ))
    return entries


def _build_request(body: dict) -> GenerationRequest:
    vocabulary = _parse_vocabulary(body["vocabulary"]) if "vocabulary" in body else _vocabulary
    target_text = body.get("target_text")
    if target_text is not None and not isinstance(target_text, str):
        raise HTTPException(400, "target_text must be a string")
    ids = body.get("ordered_vocab_ids")
    if ids is not None and not (isinstance(ids, list) and all(isinstance(i, str) for i in ids)):
        raise HTTPException(400, "ordered_vocab_ids must be a list of strings")
    max_size = body.get("max_size")
    if max_size is not None and not isinstance(max_size, int):
        raise HTTPException(400, "max_size must be an integer")
    try:
        return GenerationRequest(
            vocabulary=vocabulary,
            target_text=target_text,
            ordered_vocab_ids=ids,
            max_size=max_size,
            distractor_strategy=body.get("distractor_strategy") or get_settings().distractor_strategy,
        )
    except ValueError as e:
        raise HTTPException(400, str(e))


async def _json_body(request: Request) -> dict:
    body = await request.json() if await request.body() else {}
    if not isinstance(body, dict):
        raise HTTPException(400, "Request body must be a JSON object")
    return body


# ── API: Vocabulary ───────────────────────────────────────────────────────

@app.get("/api/vocabulary")
async def api_vocabulary():
    return {
        "count": len(_vocabulary),
        "entries": [asdict(e) for e in _vocabulary],
    }


@app.get("/api/semantic-groups")
async def api_semantic_groups():
    return get_index().to_dict()


@app.post("/api/import")
async def api_import():
    global _vocabulary
    _vocabulary = load_vocabulary_files(get_settings().resolved_vocab_files())
    _log.info("Vocabulary reloaded: %d entries", len(_vocabulary))
    return {"total_entries": len(_vocabulary)}


# ── API: Word bank ────────────────────────────────────────────────────────

@app.post("/api/word-bank")
async def api_word_bank(request: Request):
    body = await _json_body(request)
    gen_request = _build_request(body)
    seed = body.get("seed", get_settings().seed)
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
        raise HTTPException(400, "seed must be an integer")
    result = generate_word_bank(
        gen_request,
        index=get_index(),
        rng=random.Random(seed),
        settings=get_settings(),
    )
    return result.to_dict()


@app.post("/api/word-bank/units")
async def api_units(request: Request):
    body = await _json_body(request)
    units = extract_units(_build_request(body), get_index())
    return {"count": len(units), "units": [asdict(u) for u in units]}


@app.post("/api/word-bank/check")
async def api_check(request: Request):
    body = await _json_body(request)
    correct = body.get("correct_words")
    submitted = body.get("submitted")
    if not isinstance(correct, list) or not isinstance(submitted, list):
        raise HTTPException(400, "correct_words and submitted must be lists")
    return {"correct": check_answer([str(c) for c in correct], [str(s) for s in submitted])}
