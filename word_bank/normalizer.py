"""Text canonicalization for glosses and learner-facing tokens.

Two flavours of normalization are used:

* ``normalize_gloss`` produces *display* text: the first slash variant of a
  gloss with punctuation stripped and whitespace tidied ("I / Me" → "I").
* ``normalize_for_match`` produces *match keys*: every slash variant,
  lower-cased, contraction-expanded and punctuation-stripped
  ("I'm good / Fine!" → ["i am good", "fine"]).
"""
from __future__ import annotations

import re

# Closed set, ordered longest-first so "won't" never loses to a shorter entry.
CONTRACTIONS: list[tuple[str, str]] = sorted(
    [
        ("i'm", "i am"),
        ("i've", "i have"),
        ("i'll", "i will"),
        ("i'd", "i would"),
        ("you're", "you are"),
        ("you've", "you have"),
        ("you'll", "you will"),
        ("we're", "we are"),
        ("we've", "we have"),
        ("they're", "they are"),
        ("they've", "they have"),
        ("he's", "he is"),
        ("she's", "she is"),
        ("it's", "it is"),
        ("that's", "that is"),
        ("what's", "what is"),
        ("where's", "where is"),
        ("let's", "let us"),
        ("don't", "do not"),
        ("doesn't", "does not"),
        ("didn't", "did not"),
        ("isn't", "is not"),
        ("aren't", "are not"),
        ("wasn't", "was not"),
        ("weren't", "were not"),
        ("haven't", "have not"),
        ("hasn't", "has not"),
        ("won't", "will not"),
        ("can't", "can not"),
        ("couldn't", "could not"),
        ("wouldn't", "would not"),
        ("shouldn't", "should not"),
    ],
    key=lambda pair: len(pair[0]),
    reverse=True,
)

_CONTRACTION_RES = [
    (re.compile(rf"(?<![\w']){re.escape(short)}(?![\w'])"), long)
    for short, long in CONTRACTIONS
]

_MATCH_PUNCT_RE = re.compile(r"[^\w\s'-]")
_WS_RE = re.compile(r"\s+")


def _collapse(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def expand_contractions(text: str) -> str:
    """Lower-case *text* and expand every known contraction in it."""
    if not text:
        return ""
    text = text.replace("’", "'").replace("‘", "'").lower()
    for pattern, long in _CONTRACTION_RES:
        text = pattern.sub(long, text)
    return _collapse(text)


def _display(text: str) -> str:
    text = text.replace("’", "'").replace("‘", "'")
    words = (w.strip("'-") for w in _MATCH_PUNCT_RE.sub("", text).split())
    return " ".join(w for w in words if w)


def normalize_gloss(text: str) -> str:
    if not text:
        return ""
    return _display(text.split("/")[0])


def normalize_for_match(text: str) -> list[str]:
    if not text:
        return []
    variants: list[str] = []
    for part in text.split("/"):
        key = expand_contractions(part)
        key = _collapse(_MATCH_PUNCT_RE.sub("", key).strip("'-"))
        if key:
            variants.append(key)
    return variants


def match_key(text: str) -> str:
    """Primary match key of *text* (its first variant), ``""`` if none."""
    variants = normalize_for_match(text)
    return variants[0] if variants else ""


def tokenize(text: str) -> list[str]:
    """Split a target phrase into whitespace-delimited tokens.

    Tokens that carry no word content (a lone "?" or "-") are dropped.
    """
    if not text:
        return []
    return [t for t in text.split() if match_key(t)]


def display_token(token: str) -> str:
    """Expected text of a token as the learner should see it."""
    return _display(token)
