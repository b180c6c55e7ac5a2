"""Tests for semantic unit extraction."""
from __future__ import annotations

from word_bank.extractor import count_semantic_units, extract_units, units_from_ids, units_from_text
from word_bank.models import GenerationRequest, VocabularyEntry


class TestUnitsFromText:
    def test_phrase_and_word(self, greeting_vocab, index):
        units = units_from_text("Hello How are you", greeting_vocab, index)
        assert [u.text for u in units] == ["Hello", "How are you"]
        assert [u.is_phrase for u in units] == [False, True]
        assert [u.source_vocab_id for u in units] == ["salam", "chetori"]

    def test_slash_gloss_uses_expected_text(self, index):
        vocab = [VocabularyEntry("man", "I / Me", "pronouns")]
        assert [u.text for u in units_from_text("I", vocab, index)] == ["I"]
        me = units_from_text("Me", vocab, index)
        assert me[0].text == "Me"
        assert me[0].source_vocab_id == "man"

    def test_unknown_word_falls_back_to_literal(self, greeting_vocab, index):
        units = units_from_text("Hello UnknownWord", greeting_vocab, index)
        assert [u.text for u in units] == ["Hello", "UnknownWord"]
        assert units[1].source_vocab_id is None
        assert units[1].semantic_group is None

    def test_every_word_kept_without_corpus(self, index):
        units = units_from_text("Hello UnknownWord MissingWord", [], index)
        assert [u.text for u in units] == ["Hello", "UnknownWord", "MissingWord"]

    def test_contextual_mapping(self, greeting_vocab, index):
        units = units_from_text("your name", greeting_vocab, index)
        assert units[0].text == "your"
        assert units[0].source_vocab_id == "shoma"
        assert units[0].semantic_group == "pronouns"
        assert units[1].source_vocab_id is None

    def test_word_covered_by_phrase_is_skipped(self, index):
        vocab = [VocabularyEntry("zendegi_mikonam", "I live / live", "verbs")]
        units = units_from_text("I live live", vocab, index)
        assert [u.text for u in units] == ["I live"]

    def test_repeated_word_not_covered_by_phrase_is_kept(self, greeting_vocab, index):
        units = units_from_text("you and you", greeting_vocab, index)
        assert [u.text for u in units] == ["you", "and", "you"]
        assert [u.source_vocab_id for u in units] == ["shoma", None, None]

    def test_trailing_punctuation(self, greeting_vocab, index):
        units = units_from_text("How are you?", greeting_vocab, index)
        assert [u.text for u in units] == ["How are you"]
        assert units[0].source_vocab_id == "chetori"

    def test_order_preserved(self, greeting_vocab, index):
        units = units_from_text("Thank you Hello", greeting_vocab, index)
        assert [u.text for u in units] == ["Thank you", "Hello"]

    def test_empty_text(self, greeting_vocab, index):
        assert units_from_text("", greeting_vocab, index) == []


class TestUnitsFromIds:
    def test_sequence(self, greeting_vocab, index):
        units = units_from_ids(["salam", "chetori"], greeting_vocab, index)
        assert [u.text for u in units] == ["Hello", "How are you"]
        assert [u.is_phrase for u in units] == [False, True]

    def test_slash_gloss_first_variant(self, greeting_vocab, index):
        assert [u.text for u in units_from_ids(["man"], greeting_vocab, index)] == ["I"]

    def test_unknown_id_skipped(self, greeting_vocab, index):
        units = units_from_ids(["salam", "nope"], greeting_vocab, index)
        assert [u.source_vocab_id for u in units] == ["salam"]


class TestExtractUnits:
    def test_target_text_wins(self, greeting_vocab, index):
        request = GenerationRequest(
            vocabulary=greeting_vocab,
            target_text="Thank you",
            ordered_vocab_ids=["salam"],
        )
        assert [u.text for u in extract_units(request, index)] == ["Thank you"]

    def test_no_input(self, index):
        request = GenerationRequest(vocabulary=[], ordered_vocab_ids=[])
        assert extract_units(request, index) == []


class TestCountSemanticUnits:
    def test_phrase_counts_once(self, greeting_vocab):
        request = GenerationRequest(vocabulary=greeting_vocab, target_text="Hello How are you")
        assert count_semantic_units(request) == 2

    def test_single_words(self, greeting_vocab):
        request = GenerationRequest(vocabulary=greeting_vocab, target_text="Hello Good")
        assert count_semantic_units(request) == 2

    def test_sequence_ids(self, greeting_vocab):
        request = GenerationRequest(vocabulary=greeting_vocab, ordered_vocab_ids=["salam", "chetori"])
        assert count_semantic_units(request) == 2

    def test_empty(self):
        assert count_semantic_units(GenerationRequest(vocabulary=[], ordered_vocab_ids=[])) == 0
