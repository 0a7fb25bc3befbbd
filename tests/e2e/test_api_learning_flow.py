from __future__ import annotations

from fastapi.testclient import TestClient

from api_server import create_app


def _client(db) -> TestClient:
    return TestClient(create_app(db))


def test_enroll_learn_complete_and_certify(db, make_course):
    course, lessons = make_course([[False, True], [False]])
    client = _client(db)

    resp = client.get(f"/api/courses/{course.id}/learn", params={"user_id": "u1"})
    assert resp.status_code == 403

    resp = client.post(f"/api/courses/{course.id}/enroll", json={"user_id": "u1"})
    assert resp.status_code == 201
    assert resp.json()["enrollment"]["status"] == "ACTIVE"
    assert client.post(f"/api/courses/{course.id}/enroll", json={"user_id": "u1"}).status_code == 409

    view = client.get(f"/api/courses/{course.id}/learn", params={"user_id": "u1"}).json()["course"]
    locks = [lesson["is_locked"] for module in view["modules"] for lesson in module["lessons"]]
    assert locks == [False, False, True]

    completed = []
    for lesson in lessons:
        resp = client.post(
            f"/api/courses/{course.id}/lessons/{lesson.id}/complete",
            json={"user_id": "u1", "time_spent": 120},
        )
        assert resp.status_code == 200
        completed.append(resp.json()["course_completed"])
    assert completed == [False, False, True]

    resp = client.post(
        f"/api/courses/{course.id}/lessons/{lessons[-1].id}/complete",
        json={"user_id": "u1"},
    )
    assert resp.json()["course_completed"] is False

    resp = client.post(
        "/api/certificates/generate",
        json={"user_id": "u1", "course_id": course.id, "student_name": "Asha"},
    )
    assert resp.status_code == 201
    unique_id = resp.json()["certificate"]["unique_id"]

    verify = client.get(f"/api/certificates/verify/{unique_id}").json()
    assert verify["verified"] is True

    pdf = client.get(f"/api/certificates/{unique_id}/pdf")
    assert pdf.status_code == 200
    assert pdf.headers["content-type"] == "application/pdf"

    again = client.post(
        "/api/certificates/generate",
        json={"user_id": "u1", "course_id": course.id, "student_name": "Asha"},
    )
    assert again.status_code == 409


def test_error_mapping(db, make_course):
    draft, _ = make_course(published=False)
    client = _client(db)

    assert client.get("/api/courses/missing/learn", params={"user_id": "u1"}).status_code == 404
    assert client.post("/api/courses/missing/lessons/nope/complete", json={"user_id": "u1"}).status_code == 404
    assert client.post(f"/api/courses/{draft.id}/enroll", json={"user_id": "u1"}).status_code == 400
    resp = client.post(
        "/api/certificates/generate",
        json={"user_id": "u1", "course_id": draft.id, "student_name": "Asha"},
    )
    assert resp.status_code == 400
    assert client.get("/api/certificates/verify/TW-0").status_code == 404


def test_lesson_completion_checks_the_course_in_the_path(db, make_course):
    course, _ = make_course()
    other, other_lessons = make_course()
    client = _client(db)
    client.post(f"/api/courses/{course.id}/enroll", json={"user_id": "u1"})
    client.post(f"/api/courses/{other.id}/enroll", json={"user_id": "u1"})

    wrong = client.post(
        f"/api/courses/{course.id}/lessons/{other_lessons[0].id}/complete",
        json={"user_id": "u1"},
    )
    assert wrong.status_code == 404
    right = client.post(
        f"/api/courses/{other.id}/lessons/{other_lessons[0].id}/complete",
        json={"user_id": "u1"},
    )
    assert right.status_code == 200
    assert right.json()["course_id"] == other.id

    negative = client.post(
        f"/api/courses/{other.id}/lessons/{other_lessons[0].id}/complete",
        json={"user_id": "u1", "time_spent": -5},
    )
    assert negative.status_code == 422
