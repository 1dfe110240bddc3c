import random

import pytest

from spellquest.curriculum import SPELLING_WORDS
from spellquest.exercises import (
    build_exercise,
    detect_patterns,
    fill_blank_mask,
    grade_exercise,
    masked_display,
    next_hint,
    pick_words,
    public_view,
    reveal_hint,
    sort_patterns,
    words_mastered_delta,
    wrong_spelling,
)


ALL_WORDS = sorted({w for words in SPELLING_WORDS.values() for w in words})


class TestDecoySpeller:
    @pytest.mark.parametrize("seed", range(10))
    def test_decoy_never_matches_word(self, seed):
        rng = random.Random(seed)
        for word in ALL_WORDS:
            assert wrong_spelling(word, rng).lower() != word.lower(), word

    def test_confusion_pattern_is_preferred(self):
        assert wrong_spelling("believe", random.Random(0)) == "beleive"
        assert wrong_spelling("phone", random.Random(0)) == "fone"

    def test_short_words_still_change(self):
        rng = random.Random(1)
        for word in ("a", "e", "to", "it"):
            assert wrong_spelling(word, rng) != word


class TestFillBlank:
    @pytest.mark.parametrize("word", ["cat", "rhythm", "intercontinental"])
    def test_mask_size_and_order(self, word):
        hidden = fill_blank_mask(word, random.Random(2))
        assert len(hidden) == max(1, len(word) // 3)
        assert hidden == sorted(set(hidden))
        assert all(0 <= i < len(word) for i in hidden)

    def test_display_and_hints(self):
        assert masked_display("rhythm", [1, 3]) == "r_y_hm"
        assert masked_display("rhythm", [1, 3], [3]) == "r_ythm"
        assert next_hint([4, 1], []) == 1
        assert next_hint([4, 1], [1]) == 4
        assert next_hint([4, 1], [1, 4]) is None

    def test_reveal_hint_updates_exercise(self):
        exercise = {"game": "fill_blank", "items": [{"id": 1, "word": "splash", "answer": "splash", "hidden": [0, 4], "revealed": []}]}
        first = reveal_hint(exercise, 1)
        assert first["index"] == 0
        assert first["letter"] == "s"
        assert first["display"] == "spla_h"
        reveal_hint(exercise, 1)
        assert reveal_hint(exercise, 1) is None
        with pytest.raises(KeyError):
            reveal_hint(exercise, 99)


class TestPatternSorter:
    def test_detects_each_family(self):
        assert detect_patterns("knight") == ["Silent Letters"]
        assert detect_patterns("street") == ["Double Letters", "Consonant Blends", "Vowel Teams"]
        assert detect_patterns("hopeless") == ["Double Letters", "Suffix Words"]
        assert detect_patterns("unhappy") == ["Double Letters", "Prefix Words"]
        assert detect_patterns("cat") == []

    def test_short_prefix_words_are_not_prefix_words(self):
        assert "Prefix Words" not in detect_patterns("rest")

    def test_categories_and_first_match_assignment(self):
        categories, assignment = sort_patterns(["knight", "wrong", "balloon", "coffee", "cat"])
        assert categories == ["Silent Letters", "Double Letters", "Vowel Teams", "Regular Words"]
        assert assignment == {
            "knight": "Silent Letters",
            "wrong": "Silent Letters",
            "balloon": "Double Letters",
            "coffee": "Double Letters",
            "cat": "Regular Words",
        }

    def test_pads_to_three_categories(self):
        categories, assignment = sort_patterns(["cat"])
        assert categories[:3] == ["Silent Letters", "Double Letters", "Consonant Blends"]
        assert categories[-1] == "Regular Words"
        assert assignment == {"cat": "Regular Words"}

    def test_at_most_four_ranked_categories(self):
        words = ["knight", "knot", "balloon", "coffee", "street", "stream", "hopeless", "careless"]
        categories, assignment = sort_patterns(words)
        assert 3 <= len(categories) <= 5
        assert set(assignment.values()) <= set(categories)


class TestGames:
    def test_pick_words_dedupes(self):
        words = pick_words(["a", "b", "a", "c"], random.Random(0), count=10)
        assert sorted(words) == ["a", "b", "c"]

    def test_word_match_offers_word_and_decoy(self):
        exercise = build_exercise("word_match", ["receive", "rhythm"], random.Random(4))
        for item in exercise["items"]:
            assert item["answer"] in item["options"]
            assert len(set(item["options"])) == 2

    def test_public_view_hides_answers(self):
        rng = random.Random(8)
        for game in ("spelling_bee", "word_match", "fill_blank", "word_sort"):
            view = public_view(build_exercise(game, ["knight", "balloon", "cat"], rng))
            assert view["game"] == game
            assert all("answer" not in item for item in view["items"])
        assert "categories" in view

    def test_unknown_game(self):
        with pytest.raises(ValueError):
            build_exercise("crossword", ["cat"], random.Random(0))

    def test_grading_is_case_insensitive_and_reports_hints(self):
        exercise = build_exercise("fill_blank", ["splash", "sketch", "robot"], random.Random(6))
        reveal_hint(exercise, 1)
        grade = grade_exercise(exercise, {"1": "SPLASH", "2": "skech"}, hint_penalty=0.5)
        assert grade.score == 1
        assert grade.total_questions == 3
        assert grade.accuracy == pytest.approx(100 / 3)
        assert grade.incorrect_words == ["sketch", "robot"]
        assert grade.hints_used == 1
        assert grade.hint_penalty == 0.5

    def test_word_sort_grades_categories(self):
        exercise = build_exercise("word_sort", ["knight", "wrong", "cat"], random.Random(0))
        answers = {str(item["id"]): item["answer"].upper() for item in exercise["items"]}
        assert grade_exercise(exercise, answers).accuracy == 100

    def test_empty_exercise_has_zero_accuracy(self):
        grade = grade_exercise({"game": "spelling_bee", "items": []}, {})
        assert (grade.score, grade.total_questions, grade.accuracy) == (0, 0, 0)

    def test_words_mastered_delta(self):
        assert words_mastered_delta(["splash", "sketch", "robot"], ["Sketch"]) == 2
