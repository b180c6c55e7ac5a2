"""Tests for redundant distractor removal."""
from __future__ import annotations

from word_bank.models import SemanticUnit
from word_bank.redundancy import RedundancyFilter, sub_phrases
from word_bank.semantic_groups import SemanticGroupIndex


def _word(text, vocab_id=None):
    return SemanticUnit(text, len(text.split()) > 1, vocab_id, None)


class TestSubPhrases:
    def test_three_word_phrase(self):
        assert sub_phrases("how are you") == {
            "how are", "are how",
            "are you", "you are",
            "how are you", "you are how",
        }

    def test_single_word(self):
        assert sub_phrases("hello") == set()


class TestRedundancyFilter:
    def test_sub_phrases_either_order(self):
        flt = RedundancyFilter([_word("How are you", "chetori")])
        kept, rejected = flt.filter([
            _word("Are you"), _word("You are"), _word("How are"), _word("Goodbye"),
        ])
        assert [u.text for u in kept] == ["Goodbye"]
        assert len(rejected) == 3

    def test_words_inside_correct_phrase(self):
        flt = RedundancyFilter([_word("I'm good", "khoobam")])
        kept, _ = flt.filter([
            _word("Good"), _word("I'm"), _word("I"), _word("Am"), _word("Yes"),
        ])
        assert [u.text for u in kept] == ["Yes"]

    def test_unrelated_phrase_kept(self):
        flt = RedundancyFilter([_word("How are you", "chetori")])
        kept, _ = flt.filter([_word("Thank you")])
        assert [u.text for u in kept] == ["Thank you"]

    def test_synonyms_of_correct_answer(self):
        flt = RedundancyFilter([_word("Hello", "salam")])
        kept, _ = flt.filter([_word("Hi"), _word("Salam"), _word("Goodbye")])
        assert [u.text for u in kept] == ["Goodbye"]
        assert flt.reason(_word("Hi")) == "synonym of a correct answer"

    def test_configured_synonyms(self):
        index = SemanticGroupIndex(synonyms=[["bye", "goodbye"]])
        flt = RedundancyFilter([_word("Bye")], index)
        kept, _ = flt.filter([_word("Goodbye"), _word("Hi")])
        assert [u.text for u in kept] == ["Hi"]

    def test_duplicates(self):
        flt = RedundancyFilter([_word("Hello", "salam")])
        assert flt.reason(_word("hello!")) == "duplicates a correct answer"
        kept, _ = flt.filter([_word("Yes"), _word("yes!")])
        assert [u.text for u in kept] == ["Yes"]

    def test_accepted_from_earlier_pass(self):
        flt = RedundancyFilter([_word("Hello", "salam")])
        kept, rejected = flt.filter([_word("Yes")], accepted=[_word("Yes")])
        assert kept == []
        assert flt.reason(rejected[0], {"yes"}) == "duplicate distractor"

    def test_no_correct_phrases_keeps_single_words(self):
        flt = RedundancyFilter([_word("Hello", "salam"), _word("You", "shoma")])
        kept, _ = flt.filter([_word("Are"), _word("Yes")])
        assert [u.text for u in kept] == ["Are", "Yes"]
