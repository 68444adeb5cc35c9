# tests/test_tokens_and_matcher.py
import pytest

from keymantra.dictation.matcher import Verdict, check, compare, normalize
from keymantra.dictation.tokens import count_separators, segment, split_tokens

C, I = Verdict.CORRECT, Verdict.INCORRECT


@pytest.mark.engine
class TestSegment:
    def test_splits_on_single_spaces(self):
        assert segment("My name is apple") == ["My", "name", "is", "apple"]

    def test_whitespace_only_answer_has_no_tokens(self):
        assert segment("  ") == []
        assert segment("") == []
        assert segment(None) == []

    def test_single_word(self):
        assert segment("single") == ["single"]

    def test_mixed_and_unicode_whitespace_runs(self):
        # Tab, newline, no-break space and ideographic space all separate words.
        assert segment(" a\t\tb\nc\u00a0d\u3000e ") == ["a", "b", "c", "d", "e"]

    def test_split_tokens_keeps_empty_slots(self):
        assert split_tokens("My name ") == ["My", "name", ""]
        assert split_tokens("") == [""]

    def test_both_splitters_agree_on_non_empty_tokens(self):
        text = "one  two three"
        assert [t for t in split_tokens(text) if t] == segment(text)

    def test_count_separators(self):
        assert count_separators("My") == 0
        assert count_separators("My   name") == 1
        assert count_separators("My name ") == 2


@pytest.mark.engine
class TestMatcher:
    def test_normalize_lowercases_and_strips_punctuation(self):
        assert normalize("Hello,") == "hello"
        assert normalize("WHAT?!") == "what"
        assert normalize("don't") == "don't"  # apostrophes are significant

    def test_punctuation_and_case_are_ignored(self):
        assert compare(["Apple."], ["apple"]) == [C]
        assert compare(["Apple"], ["apple!"]) == [C]

    def test_per_slot_verdicts(self):
        result = check(["My", "name", "is", "apple"], ["my", "NAME", "is", "aple"])
        assert result.verdicts == [C, C, C, I]
        assert result.all_correct is False

    def test_missing_user_tokens_count_as_empty(self):
        assert compare(["My", "name"], ["My"]) == [C, I]

    def test_extra_user_tokens_are_ignored(self):
        result = check(["hi"], ["hi", "there", ""])
        assert result.verdicts == [C]
        assert result.all_correct is True
        assert result.extra_tokens == 1

    def test_empty_expected_is_vacuously_correct(self):
        result = check([], ["anything"])
        assert result.verdicts == []
        assert result.all_correct is True

    def test_custom_punctuation_set(self):
        assert compare(["co-op"], ["coop"], punctuation="-") == [C]
        assert compare(["co-op"], ["coop"]) == [I]
