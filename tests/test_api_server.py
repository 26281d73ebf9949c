"""
Tests for the HTTP API, using the fallback question bank and a seeded selector.
"""

import random

import pytest
from fastapi.testclient import TestClient

from trivia_quiz.core.models import AuthenticatedUser
from trivia_quiz.core.quiz_manager import QuizManager
from trivia_quiz.core.services.question_cache import QuestionCache
from trivia_quiz.core.services.question_source import QuestionSource
from trivia_quiz.core.services.quiz_sessions import QuizSessionStore
from trivia_quiz.core.settings import Settings
from trivia_quiz.server.api_server import create_api_app, current_user

PLAYER = AuthenticatedUser(id="player-1", provider="github", name="Player One")


@pytest.fixture
def manager() -> QuizManager:
    return QuizManager(
        source=QuestionSource(None, QuestionCache(300)),
        sessions=QuizSessionStore(rng_factory=lambda: random.Random(99)),
    )


@pytest.fixture
def anonymous_client(manager) -> TestClient:
    return TestClient(create_api_app(manager, Settings()))


@pytest.fixture
def client(manager) -> TestClient:
    app = create_api_app(manager, Settings())
    app.dependency_overrides[current_user] = lambda: PLAYER
    return TestClient(app)


class TestQuestionEndpoints:
    def test_health(self, anonymous_client):
        response = anonymous_client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["googleSheets"] == "Using fallback"

    def test_list_questions_uses_fallback_bank(self, anonymous_client):
        body = anonymous_client.get("/api/questions").json()

        assert body["success"] is True
        assert body["source"] == "fallback"
        assert body["count"] == 20
        first = body["questions"][0]
        assert set(first) == {"id", "question", "options", "weightage", "correctAnswer"}

    def test_stats(self, anonymous_client):
        stats = anonymous_client.get("/api/questions/stats").json()["stats"]

        assert stats["totalQuestions"] == 20
        assert stats["totalWeightage"] == 200
        assert stats["weightageDistribution"] == {"5": 8, "10": 8, "20": 4}
        assert stats["source"] == "fallback"

    def test_single_question(self, anonymous_client):
        body = anonymous_client.get("/api/questions/1").json()

        assert body["question"]["id"] == 1
        assert body["question"]["correctAnswer"] == 2

    @pytest.mark.parametrize("question_id", ["abc", "0", "-3"])
    def test_invalid_question_id(self, anonymous_client, question_id):
        response = anonymous_client.get(f"/api/questions/{question_id}")

        assert response.status_code == 400

    def test_unknown_question_id(self, anonymous_client):
        response = anonymous_client.get("/api/questions/999")

        assert response.status_code == 404

    def test_refresh(self, anonymous_client):
        body = anonymous_client.post("/api/questions/refresh").json()

        assert body["success"] is True
        assert body["questions"] == 20
        assert body["source"] == "fallback"

    def test_debug_reports_cache(self, anonymous_client):
        debug = anonymous_client.get("/api/debug").json()["debug"]

        assert debug["googleSheets"]["configured"] is False
        assert debug["cache"]["ttlSeconds"] == 300


class TestAuthEndpoints:
    def test_user_requires_login(self, anonymous_client):
        response = anonymous_client.get("/api/auth/user")

        assert response.status_code == 401

    def test_user_when_logged_in(self, client):
        body = client.get("/api/auth/user").json()

        assert body["user"]["id"] == "player-1"

    def test_unconfigured_provider_is_not_found(self, anonymous_client):
        response = anonymous_client.get("/api/auth/google", follow_redirects=False)

        assert response.status_code == 404

    def test_logout(self, anonymous_client):
        response = anonymous_client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json()["success"] is True


class TestQuizFlow:
    def test_quiz_requires_login(self, anonymous_client):
        response = anonymous_client.post("/api/quiz/start", json={})

        assert response.status_code == 401

    def test_start_answer_submit(self, client):
        start = client.post("/api/quiz/start", json={})
        assert start.status_code == 201
        quiz = start.json()
        assert quiz["deliveredCount"] == 10
        assert quiz["totalScore"] == 100
        assert quiz["exactMatch"] is True
        assert quiz["underfilled"] is False
        assert all("correctAnswer" not in question for question in quiz["questions"])
        assert all(question["question_html"] for question in quiz["questions"])

        first = quiz["questions"][0]
        answer = client.post(
            "/api/quiz/answer",
            json={"question_id": first["id"], "selected_option_index": 0},
        )
        assert answer.status_code == 201

        in_progress = client.get("/api/quiz").json()
        assert in_progress["answeredQuestionIds"] == [first["id"]]

        results = client.post("/api/quiz/submit").json()["results"]
        assert results["maxScore"] == 100
        assert results["answeredQuestions"] == 1
        assert results["totalQuestions"] == 10
        assert set(results["difficultyBreakdown"]) == {"easy", "medium", "hard"}

        assert client.get("/api/quiz").status_code == 404

    def test_custom_target_and_count(self, client):
        quiz = client.post("/api/quiz/start", json={"target_score": 30, "count": 3}).json()

        assert quiz["deliveredCount"] == 3
        assert quiz["totalScore"] == 30

    def test_count_larger_than_pool_is_underfilled(self, client):
        quiz = client.post("/api/quiz/start", json={"target_score": 500, "count": 50}).json()

        assert quiz["deliveredCount"] == 20
        assert quiz["requestedCount"] == 50
        assert quiz["underfilled"] is True

    def test_invalid_target_is_rejected(self, client):
        response = client.post("/api/quiz/start", json={"target_score": 0})

        assert response.status_code == 422

    def test_answer_without_quiz_conflicts(self, client):
        response = client.post(
            "/api/quiz/answer", json={"question_id": 1, "selected_option_index": 0}
        )

        assert response.status_code == 409

    def test_answer_outside_quiz_is_rejected(self, client):
        quiz = client.post("/api/quiz/start", json={"target_score": 30, "count": 3}).json()
        served = {question["id"] for question in quiz["questions"]}
        outside = next(qid for qid in range(1, 21) if qid not in served)

        response = client.post(
            "/api/quiz/answer", json={"question_id": outside, "selected_option_index": 0}
        )

        assert response.status_code == 422

    def test_submit_without_quiz_conflicts(self, client):
        response = client.post("/api/quiz/submit")

        assert response.status_code == 409


def test_same_id_on_different_providers_gets_separate_quizzes(manager):
    github_app = create_api_app(manager, Settings())
    github_app.dependency_overrides[current_user] = lambda: AuthenticatedUser(
        id="12345", provider="github", name="GitHub user"
    )
    google_app = create_api_app(manager, Settings())
    google_app.dependency_overrides[current_user] = lambda: AuthenticatedUser(
        id="12345", provider="google", name="Google user"
    )
    github_client = TestClient(github_app)
    google_client = TestClient(google_app)

    github_quiz = github_client.post("/api/quiz/start", json={}).json()
    assert google_client.get("/api/quiz").status_code == 404

    google_quiz = google_client.post(
        "/api/quiz/start", json={"target_score": 30, "count": 3}
    ).json()
    assert github_client.get("/api/quiz").json()["quizId"] == github_quiz["quizId"]
    assert google_client.get("/api/quiz").json()["quizId"] == google_quiz["quizId"]
    assert manager.get_quiz("github:12345") is not None
