from __future__ import annotations

import random

from fastapi.testclient import TestClient

from api_server import create_app


def test_adaptive_interview_round_trip(db):
    client = TestClient(create_app(db, rng=random.Random(3)))
    for difficulty, topic in (("INTERMEDIATE", "APIs"), ("ADVANCED", "Scaling"), ("BEGINNER", "Basics")):
        resp = client.post(
            "/api/knowledge-base",
            json={"domain": "TECHNOLOGY", "difficulty": difficulty, "topic": topic, "content": f"{topic} question"},
        )
        assert resp.status_code == 201

    first = client.post("/api/interviews/iv1/next-question", json={"domain": "TECHNOLOGY"}).json()
    assert first["difficulty"] == "INTERMEDIATE"
    assert first["topic"] == "APIs"
    assert first["turn"] == 1

    resp = client.post(
        "/api/interviews/iv1/response",
        json={
            "question": first["question"],
            "question_id": first["question_id"],
            "answer": "x" * 150,
            "difficulty": first["difficulty"],
            "topic": first["topic"],
        },
    )
    assert resp.json()["evaluation"] == {
        "score": 85,
        "feedback": "Excellent, detailed answer using STAR method.",
        "sentiment": "POSITIVE",
    }

    second = client.post("/api/interviews/iv1/next-question", json={"domain": "TECHNOLOGY"}).json()
    assert second["difficulty"] == "ADVANCED"
    assert second["turn"] == 2

    client.post("/api/interviews/iv1/response", json={"question": second["question"], "answer": ""})
    third = client.post("/api/interviews/iv1/next-question", json={"domain": "TECHNOLOGY"}).json()
    assert third["difficulty"] == "INTERMEDIATE"

    history = client.get("/api/interviews/iv1/history").json()
    assert [turn["score"] for turn in history["turns"]] == [85, 50]

    summary = client.get("/api/interviews/iv1/summary").json()
    assert summary["turns"] == 2
    assert summary["average_score"] == 67.5


def test_empty_domain_falls_back_over_http(db):
    client = TestClient(create_app(db))
    resp = client.post("/api/interviews/iv9/next-question", json={"domain": "LAW"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["question"] == "Tell me about yourself."
    assert body["topic"] == "Intro"


def test_knowledge_base_listing_and_stats(db):
    client = TestClient(create_app(db))
    client.post(
        "/api/knowledge-base",
        json={"domain": "TECHNOLOGY", "difficulty": "ADVANCED", "topic": "Caching", "content": "Design a CDN"},
    )
    assert client.post(
        "/api/knowledge-base",
        json={"domain": "TECHNOLOGY", "difficulty": "HARD", "topic": "x", "content": "y"},
    ).status_code == 422

    entries = client.get("/api/knowledge-base", params={"search": "CDN"}).json()
    assert [entry["topic"] for entry in entries] == ["Caching"]
    stats = client.get("/api/knowledge-base/stats").json()
    assert stats["total"] == 1
    assert stats["by_difficulty"] == {"ADVANCED": 1}
