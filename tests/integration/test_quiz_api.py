"""Quiz API endpoint tests."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from cq.storage import get_store
from cq.store.records import Kind


async def _japan_questions() -> tuple[int, list]:
    store = get_store()
    japan = next(t for t in await store.list(Kind.TOPIC) if t.country == "Japan")
    return japan.id, await store.list(Kind.QUESTION, topic_id=japan.id)


class TestTopics:
    @pytest.mark.asyncio
    async def test_list_topics(self, client: AsyncClient):
        response = await client.get("/api/v1/topics")
        assert response.status_code == 200
        topics = response.json()["topics"]
        assert len(topics) == 6
        first = topics[0]
        assert first["name"] == "Japanese"
        assert first["progress"] == {
            "questions_completed": 0,
            "total_questions": 8,
            "best_score": 0,
            "level": "Beginner",
            "progress_percent": 0,
        }

    @pytest.mark.asyncio
    async def test_get_topic(self, client: AsyncClient):
        topic_id, _ = await _japan_questions()
        response = await client.get(f"/api/v1/topics/{topic_id}")
        assert response.status_code == 200
        assert response.json()["country"] == "Japan"

    @pytest.mark.asyncio
    async def test_get_missing_topic(self, client: AsyncClient):
        response = await client.get("/api/v1/topics/99999")
        assert response.status_code == 404
        assert response.json() == {"detail": "Topic 99999 not found"}


class TestStartQuiz:
    @pytest.mark.asyncio
    async def test_default_count_capped_by_bank(self, client: AsyncClient):
        topic_id, questions = await _japan_questions()
        response = await client.get(f"/api/v1/quiz/{topic_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["topic"]["id"] == topic_id
        assert len(data["questions"]) == len(questions) == 4

    @pytest.mark.asyncio
    async def test_answers_not_exposed(self, client: AsyncClient):
        topic_id, _ = await _japan_questions()
        response = await client.get(f"/api/v1/quiz/{topic_id}", params={"count": 2})
        questions = response.json()["questions"]
        assert len(questions) == 2
        for question in questions:
            assert "correct_answer" not in question
            assert "cultural_fact" not in question
            assert question["options"]

    @pytest.mark.asyncio
    async def test_invalid_count(self, client: AsyncClient):
        topic_id, _ = await _japan_questions()
        response = await client.get(f"/api/v1/quiz/{topic_id}", params={"count": 0})
        assert response.status_code == 422
        assert response.json()["detail"] == "Validation error"

    @pytest.mark.asyncio
    async def test_missing_topic(self, client: AsyncClient):
        response = await client.get("/api/v1/quiz/99999")
        assert response.status_code == 404


class TestSubmitQuiz:
    @pytest.mark.asyncio
    async def test_submit_and_progress(self, client: AsyncClient):
        topic_id, questions = await _japan_questions()
        body = {
            "topic_id": topic_id,
            "answers": [
                {"question_id": q.id, "answer": q.correct_answer, "time_spent": 12000} for q in questions
            ],
            "total_time": 200,
        }
        response = await client.post("/api/v1/quiz/submit", json=body)
        assert response.status_code == 200
        data = response.json()
        assert data["points_earned"] == 700
        assert data["accuracy"] == 100
        assert data["level_up"] is True
        assert data["new_level"] == "Intermediate"
        assert len(data["detailed_answers"]) == 4
        assert all(a["cultural_fact"] for a in data["detailed_answers"])
        assert "perfect_score" in [a["requirement"] for a in data["new_achievements"]]
        assert data["updated_stats"]["challenges_completed"] == 1

        topics = (await client.get("/api/v1/topics")).json()["topics"]
        japan = next(t for t in topics if t["id"] == topic_id)
        assert japan["progress"]["questions_completed"] == 4
        assert japan["progress"]["progress_percent"] == 50
        assert japan["progress"]["best_score"] == 700

    @pytest.mark.asyncio
    async def test_empty_submission(self, client: AsyncClient):
        topic_id, _ = await _japan_questions()
        response = await client.post(
            "/api/v1/quiz/submit", json={"topic_id": topic_id, "answers": [], "total_time": 10}
        )
        assert response.status_code == 400
        assert response.json() == {"detail": "Submission contains no answers"}

    @pytest.mark.asyncio
    async def test_unknown_question(self, client: AsyncClient):
        topic_id, _ = await _japan_questions()
        response = await client.post(
            "/api/v1/quiz/submit",
            json={"topic_id": topic_id, "answers": [{"question_id": 99999, "answer": "x"}], "total_time": 10},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == f"Question 99999 not found in topic {topic_id}"

        stats = (await client.get("/api/v1/stats")).json()
        assert stats["challenges_completed"] == 0

    @pytest.mark.asyncio
    async def test_unknown_topic(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/quiz/submit",
            json={"topic_id": 99999, "answers": [{"question_id": 1, "answer": "x"}], "total_time": 10},
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_negative_time_rejected(self, client: AsyncClient):
        topic_id, questions = await _japan_questions()
        response = await client.post(
            "/api/v1/quiz/submit",
            json={"topic_id": topic_id, "answers": [{"question_id": questions[0].id, "answer": "x"}], "total_time": -1},
        )
        assert response.status_code == 422
