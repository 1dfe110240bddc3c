import random
from datetime import date, datetime, timedelta

import pytest

from spellquest.curriculum import DIAGNOSTIC_PART_MAX, DIAGNOSTIC_QUESTIONS, SPELLING_WORDS
from spellquest.progression import (
    checkpoint_state,
    corrupt_last_letter,
    generate_checkpoint,
    grade_checkpoint,
    next_phase_after_pass,
    phase_after_diagnostic,
    recommend_phase,
    score_diagnostic,
    segment_minutes,
    skill_level,
    update_streak,
)


def answers_except(wrong_ids=()):
    """Correct answers for the whole bank, minus the given question ids."""
    answers = {}
    for q in DIAGNOSTIC_QUESTIONS:
        if q["id"] in wrong_ids:
            continue
        expected = q["answer"]
        answers[str(q["id"])] = expected[0] if isinstance(expected, list) else expected
    return answers


class TestDiagnosticScoring:
    def test_bank_is_worth_one_hundred_points(self):
        assert sum(q["points"] for q in DIAGNOSTIC_QUESTIONS) == 100
        assert sum(DIAGNOSTIC_PART_MAX.values()) == 100
        for part, maximum in DIAGNOSTIC_PART_MAX.items():
            assert sum(q["points"] for q in DIAGNOSTIC_QUESTIONS if q["part"] == part) == maximum

    def test_perfect_run_recommends_phase_four(self):
        score = score_diagnostic(answers_except())
        assert score.total_score == 100
        assert score.part_scores == {"A": 40, "B": 30, "C": 20, "D": 10}
        assert score.recommended_phase == 4
        assert score.error_patterns == {}

    def test_mixed_run_scores_each_part(self):
        # Misses: one 5-point item in A, B and C, both small items in D
        score = score_diagnostic(answers_except({8, 9, 17, 24, 25}))
        assert score.part_scores == {"A": 35, "B": 25, "C": 15, "D": 5}
        assert score.total_score == 80
        assert score.recommended_phase == 3
        assert score.error_patterns == {"vocabulary": 1, "rules": 1, "homophones": 1, "descriptive": 2}

    def test_answers_are_trimmed_and_case_insensitive(self):
        score = score_diagnostic({"1": "  BEAUTIFUL ", 20: "Favourite"})
        assert score.part_scores["A"] == 5
        assert score.part_scores["C"] == 3
        assert score.total_score == 8

    def test_empty_submission_and_empty_bank(self):
        empty = score_diagnostic({})
        assert empty.total_score == 0
        assert empty.recommended_phase == 1
        assert sum(empty.error_patterns.values()) == len(DIAGNOSTIC_QUESTIONS)

        no_bank = score_diagnostic({"1": "beautiful"}, bank=[])
        assert no_bank.total_score == 0
        assert no_bank.recommended_phase == 1

    @pytest.mark.parametrize("total,phase", [
        (100, 4), (85, 4), (84, 3), (70, 3), (69, 2), (55, 2), (54, 1), (40, 1), (0, 1),
    ])
    def test_phase_thresholds(self, total, phase):
        assert recommend_phase(total) == phase


class TestRetakePolicy:
    def test_keep_highest_never_lowers_phase(self):
        assert phase_after_diagnostic(4, 2, "keep_highest") == 4
        assert phase_after_diagnostic(1, 3, "keep_highest") == 3

    def test_overwrite_follows_recommendation(self):
        assert phase_after_diagnostic(4, 2, "overwrite") == 2

    def test_unknown_policy_is_rejected(self):
        with pytest.raises(ValueError):
            phase_after_diagnostic(1, 2, "lowest")


class TestStreaks:
    today = date(2025, 3, 12)

    def test_first_activity_starts_streak(self):
        result = update_streak(None, 0, 0, self.today)
        assert (result.current_streak, result.longest_streak, result.first_activity) == (1, 1, True)

    def test_consecutive_day_extends_streak(self):
        result = update_streak(datetime(2025, 3, 11, 18, 30), 6, 6, self.today)
        assert result.current_streak == 7
        assert result.longest_streak == 7
        assert result.first_activity is False

    def test_same_day_keeps_streak(self):
        result = update_streak(datetime(2025, 3, 12, 7, 0), 4, 9, self.today)
        assert (result.current_streak, result.longest_streak) == (4, 9)

    def test_gap_resets_streak_but_keeps_longest(self):
        result = update_streak(self.today - timedelta(days=3), 5, 5, self.today)
        assert (result.current_streak, result.longest_streak) == (1, 5)

    def test_segment_minutes(self):
        assert segment_minutes(True) == 10
        assert segment_minutes(False) == 0


class TestCheckpoints:
    def test_generates_fifteen_cycling_questions(self):
        questions = generate_checkpoint(1, random.Random(3))
        assert len(questions) == 15
        assert [q["type"] for q in questions[:6]] == ["spelling", "multiple_choice", "fill_blank"] * 2
        assert all(q["points"] == 5 for q in questions)
        assert len({q["answer"] for q in questions}) == 15
        assert all(q["answer"] in SPELLING_WORDS[1] for q in questions)

    def test_question_shapes(self):
        questions = generate_checkpoint(2, random.Random(11))
        for q in questions:
            word = q["answer"]
            if q["type"] == "multiple_choice":
                assert sorted(q["options"]) == sorted([word, corrupt_last_letter(word)])
            elif q["type"] == "fill_blank":
                blank = len(word) // 2
                assert q["question"].endswith(word[:blank] + "___" + word[blank + 1:])
            else:
                assert q["prompt_word"] == word

    def test_corrupted_spelling_always_differs(self):
        assert corrupt_last_letter("sprint") == "sprine"
        assert corrupt_last_letter("flake") == "flaka"

    def test_empty_word_list_gives_empty_quiz(self):
        assert generate_checkpoint(1, random.Random(0), words=[]) == []

    def test_pass_boundary_is_exactly_eighty_percent(self):
        questions = generate_checkpoint(1, random.Random(5))
        correct = {str(q["id"]): q["answer"] for q in questions}

        twelve = dict(list(correct.items())[:12])
        grade = grade_checkpoint(questions, twelve)
        assert (grade.score, grade.total_points, grade.passed) == (60, 75, True)

        eleven = dict(list(correct.items())[:11])
        grade = grade_checkpoint(questions, eleven)
        assert (grade.score, grade.passed) == (55, False)

    def test_zero_total_fails(self):
        grade = grade_checkpoint([], {})
        assert grade.total_points == 0
        assert grade.passed is False

    def test_state_machine(self):
        assert checkpoint_state([]) == "not_attempted"
        assert checkpoint_state([False, False]) == "failed"
        assert checkpoint_state([False, True]) == "passed"

    def test_phase_advance_rules(self):
        assert next_phase_after_pass(2, 2) == 3
        assert next_phase_after_pass(None, 1) == 2
        assert next_phase_after_pass(3, 2) is None
        assert next_phase_after_pass(6, 6) is None

    @pytest.mark.parametrize("phase,level", [
        (None, "Beginner"), (1, "Beginner"), (2, "Beginner"), (3, "Intermediate"),
        (4, "Intermediate"), (5, "Advanced"), (6, "Advanced"),
    ])
    def test_skill_level(self, phase, level):
        assert skill_level(phase) == level
