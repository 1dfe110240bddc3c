from datetime import datetime, timedelta
import json

from sqlalchemy import select

from spellquest.curriculum import DIAGNOSTIC_QUESTIONS
from spellquest.models import IssuedQuiz, UserProgress


def diagnostic_answers(wrong_ids=()):
    answers = {}
    for q in DIAGNOSTIC_QUESTIONS:
        if q["id"] in wrong_ids:
            continue
        expected = q["answer"]
        answers[str(q["id"])] = expected[0] if isinstance(expected, list) else expected
    return answers


def user_id(client, headers):
    return client.get("/auth/me", headers=headers).json()["id"]


def stored_payload(session_factory, quiz_id):
    with session_factory() as s:
        return json.loads(s.get(IssuedQuiz, quiz_id).payload_json)


def set_progress(session_factory, uid, **values):
    with session_factory() as s:
        progress = s.execute(select(UserProgress).where(UserProgress.user_id == uid)).scalar_one()
        for name, value in values.items():
            setattr(progress, name, value)
        s.commit()


class TestDiagnostic:
    def test_questions_hide_answers(self, client):
        body = client.get("/diagnostic/questions").json()
        assert body["max_score"] == 100
        assert len(body["questions"]) == len(DIAGNOSTIC_QUESTIONS)
        assert all("answer" not in q for q in body["questions"])

    def test_submission_places_learner(self, client, auth_headers):
        res = client.post("/diagnostic", json={"answers": diagnostic_answers({8, 9, 17, 24, 25})}, headers=auth_headers)
        assert res.status_code == 200, res.text
        body = res.json()
        assert body["total_score"] == 80
        assert body["part_scores"] == {"A": 35, "B": 25, "C": 15, "D": 5}
        assert body["recommended_phase"] == 3
        assert body["current_phase"] == 3
        assert body["error_patterns"] == {"vocabulary": 1, "rules": 1, "homophones": 1, "descriptive": 2}
        assert body["top_error_patterns"][0] == {"category": "descriptive", "count": 2}
        assert body["unlocked_achievements"] == ["diagnostic_complete"]

        latest = client.get("/diagnostic/latest", headers=auth_headers).json()
        assert latest["total_score"] == 80

    def test_retake_never_lowers_phase(self, client, auth_headers):
        client.post("/diagnostic", json={"answers": diagnostic_answers({8, 9, 17, 24, 25})}, headers=auth_headers)
        retake = client.post("/diagnostic", json={"answers": {}}, headers=auth_headers).json()
        assert retake["total_score"] == 0
        assert retake["recommended_phase"] == 1
        assert retake["current_phase"] == 3
        assert retake["unlocked_achievements"] == []

    def test_latest_without_attempt(self, client, auth_headers):
        assert client.get("/diagnostic/latest", headers=auth_headers).status_code == 404


class TestDailyActivity:
    def test_segments_credit_once(self, client, auth_headers):
        first = client.post("/daily-activity", json={"segment": "visual", "phase_number": 1}, headers=auth_headers).json()
        assert first["minutes_credited"] == 10
        assert first["current_streak"] == 1
        assert "first_session" in first["unlocked_achievements"]

        again = client.post("/daily-activity", json={"segment": "visual", "phase_number": 1}, headers=auth_headers).json()
        assert again["minutes_credited"] == 0
        assert again["total_study_minutes"] == 10
        assert again["current_streak"] == 1
        assert again["unlocked_achievements"] == []

        other = client.post("/daily-activity", json={"segment": "auditory", "phase_number": 1}, headers=auth_headers).json()
        assert other["minutes_credited"] == 10
        assert other["total_study_minutes"] == 20
        assert other["activity"]["total_minutes"] == 20
        assert other["activity"]["segments"] == {"visual": True, "auditory": True, "kinesthetic": False}

    def test_seventh_day_unlocks_streak_badge(self, client, session_factory, auth_headers):
        uid = user_id(client, auth_headers)
        set_progress(
            session_factory, uid,
            current_streak=6, longest_streak=6, last_activity_date=datetime.now() - timedelta(days=1),
        )
        body = client.post("/daily-activity", json={"segment": "kinesthetic", "phase_number": 1}, headers=auth_headers).json()
        assert body["current_streak"] == 7
        assert body["longest_streak"] == 7
        assert "week_streak_7" in body["unlocked_achievements"]
        assert "first_session" not in body["unlocked_achievements"]

    def test_bad_segment_is_rejected(self, client, auth_headers):
        assert client.post("/daily-activity", json={"segment": "smell", "phase_number": 1}, headers=auth_headers).status_code == 400
        assert client.post("/daily-activity", json={"segment": "visual", "phase_number": 7}, headers=auth_headers).status_code == 400

    def test_schedule(self, client, auth_headers):
        body = client.get("/daily-activity/schedule", params={"day": "Monday"}, headers=auth_headers).json()
        assert body["phase_number"] == 1
        assert body["today"] is None
        assert client.get("/daily-activity/schedule", params={"day": "Someday"}, headers=auth_headers).status_code == 400


class TestExercises:
    def test_perfect_game(self, client, session_factory, auth_headers):
        start = client.post("/exercises/start", json={"game": "word_match"}, headers=auth_headers).json()
        assert all("answer" not in item for item in start["items"])
        payload = stored_payload(session_factory, start["quiz_id"])
        answers = {str(item["id"]): item["answer"] for item in payload["items"]}

        res = client.post(f"/exercises/{start['quiz_id']}/submit", json={"answers": answers, "time_spent": 90}, headers=auth_headers)
        assert res.status_code == 200, res.text
        body = res.json()
        assert body["accuracy"] == 100
        assert body["incorrect_words"] == []
        assert body["words_mastered"] == len(payload["items"])
        assert body["spelling_accuracy"] == 100
        assert set(body["unlocked_achievements"]) == {"perfect_score", "accuracy_90"}

        replay = client.post(f"/exercises/{start['quiz_id']}/submit", json={"answers": answers}, headers=auth_headers)
        assert replay.status_code == 409

        recent = client.get("/exercises/recent", headers=auth_headers).json()["results"]
        assert len(recent) == 1
        assert recent[0]["exercise_type"] == "word_match"
        assert recent[0]["time_spent"] == 90

    def test_accuracy_averages_all_games(self, client, auth_headers):
        for _ in range(2):
            start = client.post("/exercises/start", json={"game": "spelling_bee"}, headers=auth_headers).json()
            client.post(f"/exercises/{start['quiz_id']}/submit", json={"answers": {}}, headers=auth_headers)
        profile = client.get("/profile", headers=auth_headers).json()
        assert profile["progress"]["spelling_accuracy"] == 0
        assert profile["progress"]["words_mastered"] == 0

    def test_hints_only_for_fill_blank(self, client, auth_headers):
        blank = client.post("/exercises/start", json={"game": "fill_blank"}, headers=auth_headers).json()
        item = blank["items"][0]
        hint = client.post(f"/exercises/{blank['quiz_id']}/hint", json={"item_id": item["id"]}, headers=auth_headers)
        assert hint.status_code == 200, hint.text
        assert hint.json()["letter"].isalpha()

        missing = client.post(f"/exercises/{blank['quiz_id']}/hint", json={"item_id": 999}, headers=auth_headers)
        assert missing.status_code == 404

        submit = client.post(f"/exercises/{blank['quiz_id']}/submit", json={"answers": {}}, headers=auth_headers).json()
        assert submit["hints_used"] == 1
        assert submit["hint_penalty"] == 0.5

        match = client.post("/exercises/start", json={"game": "word_match"}, headers=auth_headers).json()
        assert client.post(f"/exercises/{match['quiz_id']}/hint", json={"item_id": 1}, headers=auth_headers).status_code == 400

    def test_unknown_quiz(self, client, auth_headers):
        assert client.post("/exercises/nope/submit", json={"answers": {}}, headers=auth_headers).status_code == 404

    def test_locked_phase_words_are_refused(self, client, auth_headers):
        res = client.post("/exercises/start", json={"game": "word_match", "phase_number": 6}, headers=auth_headers)
        assert res.status_code == 400
        assert res.json()["detail"][0]["loc"] == ["body", "phase_number"]

        allowed = client.post("/exercises/start", json={"game": "word_match", "phase_number": 1}, headers=auth_headers)
        assert allowed.status_code == 200
        assert allowed.json()["phase_number"] == 1


class TestCheckpoints:
    def test_pass_at_boundary_advances(self, client, session_factory, auth_headers):
        set_progress(session_factory, user_id(client, auth_headers), current_phase=2)
        start = client.post("/checkpoints/2/start", headers=auth_headers).json()
        assert start["total_points"] == 75
        assert all("answer" not in q for q in start["questions"])

        questions = stored_payload(session_factory, start["quiz_id"])["questions"]
        answers = {str(q["id"]): q["answer"] for q in questions[:12]}
        res = client.post(f"/checkpoints/{start['quiz_id']}/submit", json={"answers": answers}, headers=auth_headers)
        assert res.status_code == 200, res.text
        body = res.json()
        assert body["score"] == 60
        assert body["passed"] is True
        assert body["attempt_number"] == 1
        assert body["current_phase"] == 3
        assert body["advanced_to"] == 3
        assert "phase_2_complete" in body["unlocked_achievements"]

        assert client.post(f"/checkpoints/{start['quiz_id']}/submit", json={"answers": answers}, headers=auth_headers).status_code == 409
        assert client.post("/checkpoints/2/start", headers=auth_headers).status_code == 409

        overview = client.get("/checkpoints", headers=auth_headers).json()
        states = {c["phase_number"]: c["state"] for c in overview["checkpoints"]}
        assert states[2] == "passed"
        assert states[3] == "not_attempted"

    def test_failed_attempt_keeps_phase(self, client, auth_headers):
        start = client.post("/checkpoints/1/start", headers=auth_headers).json()
        body = client.post(f"/checkpoints/{start['quiz_id']}/submit", json={"answers": {}}, headers=auth_headers).json()
        assert body["passed"] is False
        assert body["current_phase"] == 1
        assert body["advanced_to"] is None

        retry = client.post("/checkpoints/1/start", headers=auth_headers).json()
        second = client.post(f"/checkpoints/{retry['quiz_id']}/submit", json={"answers": {}}, headers=auth_headers).json()
        assert second["attempt_number"] == 2

    def test_locked_phase(self, client, auth_headers):
        assert client.post("/checkpoints/5/start", headers=auth_headers).status_code == 400
        assert client.post("/checkpoints/9/start", headers=auth_headers).status_code == 400

    def test_earlier_quiz_cannot_reopen_passed_phase(self, client, session_factory, auth_headers):
        first = client.post("/checkpoints/1/start", headers=auth_headers).json()
        second = client.post("/checkpoints/1/start", headers=auth_headers).json()

        questions = stored_payload(session_factory, first["quiz_id"])["questions"]
        answers = {str(q["id"]): q["answer"] for q in questions}
        assert client.post(f"/checkpoints/{first['quiz_id']}/submit", json={"answers": answers}, headers=auth_headers).json()["passed"] is True

        late = client.post(f"/checkpoints/{second['quiz_id']}/submit", json={"answers": {}}, headers=auth_headers)
        assert late.status_code == 409

        overview = client.get("/checkpoints", headers=auth_headers).json()
        phase_1 = overview["checkpoints"][0]
        assert phase_1["state"] == "passed"
        assert phase_1["attempts"] == 1


class TestWriting:
    def test_completion_unlocks_one_challenge(self, client, auth_headers):
        text = " ".join(["word"] * 60)
        res = client.post("/writing", json={"project_number": 1, "content": text, "status": "COMPLETED"}, headers=auth_headers)
        assert res.status_code == 200, res.text
        body = res.json()
        assert body["project"]["word_count"] == 60
        assert body["new_challenge"]["challenge_type"] == "CREATIVE_EXTENSION"
        assert body["new_challenge"]["level"] == "Beginner"
        assert body["new_challenge"]["word_goal"] == 175
        assert body["unlocked_achievements"] == ["writing_project_1"]

        again = client.post("/writing", json={"project_number": 1, "content": text, "status": "COMPLETED"}, headers=auth_headers).json()
        assert again["new_challenge"] is None
        assert again["unlocked_achievements"] == []

        reopen = client.post("/writing", json={"project_number": 1, "content": text, "status": "DRAFT"}, headers=auth_headers)
        assert reopen.status_code == 409

        challenges = client.get("/writing/challenges", headers=auth_headers).json()["challenges"]
        assert len(challenges) == 1
        progress = client.get("/profile", headers=auth_headers).json()["progress"]
        assert progress["creative_word_count"] == 60

        projects = client.get("/writing/projects", headers=auth_headers).json()
        assert projects["completed"] == 1
        assert projects["projects"][0]["saved"]["status"] == "COMPLETED"
        assert projects["projects"][1]["saved"] is None

    def test_short_piece_cannot_complete(self, client, auth_headers):
        res = client.post("/writing", json={"project_number": 2, "content": "too short", "status": "COMPLETED"}, headers=auth_headers)
        assert res.status_code == 400
        assert res.json()["detail"][0]["loc"] == ["body", "content"]

        draft = client.post("/writing", json={"project_number": 2, "content": "too short"}, headers=auth_headers).json()
        assert draft["project"]["status"] == "DRAFT"
        assert draft["new_challenge"] is None

    def test_challenge_completion_counts_words(self, client, auth_headers):
        client.post("/writing", json={"project_number": 1, "content": " ".join(["word"] * 60), "status": "COMPLETED"}, headers=auth_headers)
        challenge_id = client.get("/writing/challenges", headers=auth_headers).json()["challenges"][0]["id"]

        res = client.post(f"/writing/challenges/{challenge_id}", json={"content": " ".join(["tale"] * 50), "status": "COMPLETED"}, headers=auth_headers)
        assert res.status_code == 200, res.text
        assert res.json()["challenge"]["status"] == "COMPLETED"
        assert client.get("/profile", headers=auth_headers).json()["progress"]["creative_word_count"] == 110

        assert client.post("/writing/challenges/999", json={"content": ""}, headers=auth_headers).status_code == 404

    def test_other_users_challenge_is_hidden(self, client, signup):
        owner = signup("owner@example.com")
        other = signup("other@example.com")
        client.post("/writing", json={"project_number": 1, "content": " ".join(["word"] * 60), "status": "COMPLETED"}, headers=owner)
        challenge_id = client.get("/writing/challenges", headers=owner).json()["challenges"][0]["id"]
        assert client.post(f"/writing/challenges/{challenge_id}", json={"content": "mine now"}, headers=other).status_code == 404


class TestProfileAndBookmarks:
    def test_profile_update(self, client, auth_headers):
        res = client.put("/profile", json={"name": "Maya", "theme_color": "#336699", "bio": "I like words"}, headers=auth_headers)
        assert res.status_code == 200, res.text
        profile = client.get("/profile", headers=auth_headers).json()
        assert profile["name"] == "Maya"
        assert profile["bio"] == "I like words"
        assert profile["skill_level"] == "Beginner"

        assert client.put("/profile", json={"bio": "x" * 501}, headers=auth_headers).status_code == 400

    def test_bookmark_toggle(self, client, auth_headers):
        add = {"resource_title": "Silent letters guide", "resource_category": "rules", "action": "add"}
        assert client.post("/bookmarks", json=add, headers=auth_headers).json()["bookmarked"] is True
        client.post("/bookmarks", json=add, headers=auth_headers)
        assert len(client.get("/bookmarks", headers=auth_headers).json()["bookmarks"]) == 1

        remove = {**add, "action": "remove"}
        assert client.post("/bookmarks", json=remove, headers=auth_headers).json()["bookmarked"] is False
        assert client.get("/bookmarks", headers=auth_headers).json()["bookmarks"] == []


class TestOverviews:
    def test_dashboard_and_analytics(self, client, auth_headers):
        client.post("/daily-activity", json={"segment": "visual", "phase_number": 1}, headers=auth_headers)
        start = client.post("/exercises/start", json={"game": "spelling_bee"}, headers=auth_headers).json()
        client.post(f"/exercises/{start['quiz_id']}/submit", json={"answers": {}}, headers=auth_headers)

        dashboard = client.get("/dashboard", headers=auth_headers).json()
        assert dashboard["today_minutes"] == 10
        assert dashboard["skill_level"] == "Beginner"
        assert len(dashboard["recent_exercises"]) == 1
        assert [p["locked"] for p in dashboard["phases"]] == [False, True, True, True, True, True]

        analytics = client.get("/analytics", headers=auth_headers).json()
        assert len(analytics["weekly_activity"]) == 7
        assert analytics["exercise_distribution"] == [{"name": "Spelling Bee", "value": 1}]
        assert analytics["average_accuracy"] == 0

    def test_achievement_catalog(self, client, auth_headers):
        client.post("/daily-activity", json={"segment": "visual", "phase_number": 1}, headers=auth_headers)
        body = client.get("/achievements", headers=auth_headers).json()
        assert body["total"] == 18
        assert body["earned"] == 1
        earned = [a["achievement_id"] for a in body["achievements"] if a["earned"]]
        assert earned == ["first_session"]

    def test_phases(self, client, auth_headers):
        body = client.get("/phases", headers=auth_headers).json()
        assert body["current_phase"] == 1
        assert len(body["phases"]) == 6
        assert body["phases"][0]["checkpoint"] == "not_attempted"
