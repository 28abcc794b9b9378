from __future__ import annotations

import csv
import io

from fastapi.testclient import TestClient

from api import shared
from services.sample_data_service import SAMPLE_QUESTIONS

NEW_QUESTION = {
    "questionText": "กฎหมายใดเป็นกฎหมายสูงสุด?",
    "options": ["พระราชบัญญัติ", "รัฐธรรมนูญ", "พระราชกฤษฎีกา", "ประกาศกระทรวง"],
    "correctAnswerIndex": 1,
    "explanation": "รัฐธรรมนูญเป็นกฎหมายสูงสุด",
    "category": "กฎหมายที่ประชาชนควรรู้",
    "difficulty": "ง่าย",
}


def test_standard_exam_set_is_seeded_without_sample_data(monkeypatch):
    monkeypatch.setenv("ADMIN_PASSWORD", "s3cret")
    monkeypatch.setenv("SEED_SAMPLE_DATA", "false")
    shared.clear_cache()

    from api.main import app

    with TestClient(app) as client:
        sets = client.get("/api/exam-sets").json()
        questions = client.get("/api/questions").json()
    shared.clear_cache()

    assert len(sets) == 1
    assert sets[0]["totalQuestions"] == 150
    assert questions == []


def test_health_and_root(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["docs"] == "/docs"


def test_seeded_questions_are_listed_in_camel_case(client):
    response = client.get("/api/questions")

    assert response.status_code == 200
    body = response.json()
    assert len(body) == len(SAMPLE_QUESTIONS)
    assert {"id", "questionText", "correctAnswerIndex", "createdAt"} <= set(body[0])


def test_filter_thai_category_any_difficulty(client):
    body = client.get("/api/questions", params={"category": "ภาษาไทย", "difficulty": "all"}).json()

    assert body
    assert all(q["category"] == "ภาษาไทย" for q in body)


def test_question_crud(client):
    created = client.post("/api/questions", json=NEW_QUESTION)
    assert created.status_code == 201
    qid = created.json()["id"]

    assert client.get(f"/api/questions/{qid}").json()["questionText"] == NEW_QUESTION["questionText"]

    updated = client.put(f"/api/questions/{qid}", json={"difficulty": "ยาก"})
    assert updated.status_code == 200
    assert updated.json()["difficulty"] == "ยาก"
    assert updated.json()["questionText"] == NEW_QUESTION["questionText"]

    assert client.delete(f"/api/questions/{qid}").status_code == 204
    assert client.get(f"/api/questions/{qid}").status_code == 404
    assert client.delete(f"/api/questions/{qid}").status_code == 404


def test_question_validation(client):
    bad = dict(NEW_QUESTION, options=["1", "2", "3"])
    assert client.post("/api/questions", json=bad).status_code == 422

    bad = dict(NEW_QUESTION, difficulty="super hard")
    assert client.post("/api/questions", json=bad).status_code == 422

    assert client.put("/api/questions/missing", json={"questionText": "x"}).status_code == 404


def test_categories_endpoint(client):
    body = client.get("/api/categories").json()

    names = [c["name"] for c in body]
    assert names[:2] == ["ความสามารถทั่วไป", "ภาษาไทย"]
    general = body[0]
    assert general["questionCount"] == 2
    assert general["builtin"] is True


def test_full_mock_exam_returns_what_is_available(client):
    response = client.post("/api/mock-exam", json={"type": "full"})

    assert response.status_code == 200
    assert len(response.json()) == len(SAMPLE_QUESTIONS)


def test_custom_mock_exam(client):
    response = client.post("/api/mock-exam", json={"type": "custom", "categories": {"ความสามารถทั่วไป": 1}})

    assert response.status_code == 200
    assert len(response.json()) == 1


def test_custom_mock_exam_errors(client):
    over = client.post("/api/mock-exam", json={"type": "custom", "categories": {"ภาษาไทย": 151}})
    assert over.status_code == 400

    unknown = client.post("/api/mock-exam", json={"type": "custom", "categories": {"Thai": 5}})
    assert unknown.status_code == 400

    missing = client.post("/api/mock-exam", json={"type": "custom"})
    assert missing.status_code == 422


def test_exam_set_crud_and_generation(client):
    sets = client.get("/api/exam-sets").json()
    assert len(sets) == 1
    assert sets[0]["totalQuestions"] == 150

    created = client.post("/api/exam-sets", json={
        "name": "ไทย-อังกฤษ",
        "description": "two subjects",
        "categoryDistribution": {"ภาษาไทย": 100, "ภาษาอังกฤษ": 100},
    })
    assert created.status_code == 201
    set_id = created.json()["id"]

    exam = client.post("/api/mock-exam", json={"examSetId": set_id})
    assert exam.status_code == 200
    assert {q["category"] for q in exam.json()} == {"ภาษาไทย", "ภาษาอังกฤษ"}

    updated = client.put(f"/api/exam-sets/{set_id}", json={"isActive": False})
    assert updated.json()["isActive"] is False
    assert len(client.get("/api/exam-sets", params={"active_only": True}).json()) == 1

    assert client.delete(f"/api/exam-sets/{set_id}").status_code == 204
    assert client.post("/api/mock-exam", json={"examSetId": set_id}).status_code == 404


def test_exam_set_rejects_unknown_category(client):
    response = client.post("/api/exam-sets", json={
        "name": "typo",
        "categoryDistribution": {"ภาษาไทยย": 10},
    })

    assert response.status_code == 400


def test_submit_score_recomputes_total(client):
    response = client.post("/api/scores", json={
        "totalScore": 99,
        "totalQuestions": 4,
        "correctAnswers": 1,
        "timeSpent": 120,
        "examType": "สอบแบบกำหนดเอง",
        "answersGiven": {"a": 0},
        "categoryBreakdown": {"ภาษาไทย": {"correct": 1, "total": 4}},
    })

    assert response.status_code == 201
    body = response.json()
    assert body["totalScore"] == 25
    assert body["categoryBreakdown"]["ภาษาไทย"] == {"correct": 1, "total": 4}
    assert "dateTaken" in body


def test_submit_score_with_question_ids_is_rescored(client):
    questions = client.get("/api/questions", params={"category": "ภาษาไทย"}).json()
    qid = questions[0]["id"]

    body = client.post("/api/scores", json={
        "totalQuestions": 1,
        "correctAnswers": 0,
        "timeSpent": 30,
        "examType": "x",
        "answersGiven": {qid: questions[0]["correctAnswerIndex"]},
        "questionIds": [qid],
    }).json()

    assert body["correctAnswers"] == 1
    assert body["totalScore"] == 100


def test_submit_score_ignores_repeated_question_ids(client):
    question = client.get("/api/questions", params={"category": "ภาษาไทย"}).json()[0]
    qid = question["id"]

    body = client.post("/api/scores", json={
        "totalQuestions": 2,
        "correctAnswers": 2,
        "timeSpent": 30,
        "examType": "x",
        "answersGiven": {qid: question["correctAnswerIndex"]},
        "questionIds": [qid, qid],
    }).json()

    assert body["totalQuestions"] == 1
    assert body["correctAnswers"] == 1
    assert body["totalScore"] == 100


def test_submit_score_validation(client):
    response = client.post("/api/scores", json={
        "totalQuestions": 1,
        "correctAnswers": 2,
        "timeSpent": 30,
        "examType": "x",
    })
    assert response.status_code == 422


def test_list_and_export_scores(client):
    for correct in (1, 2):
        client.post("/api/scores", json={
            "totalQuestions": 2, "correctAnswers": correct, "timeSpent": 90, "examType": "x",
        })

    assert len(client.get("/api/scores").json()) == 2
    assert len(client.get("/api/scores", params={"limit": 1}).json()) == 1

    export = client.post("/api/scores/export")
    assert export.status_code == 200
    assert export.headers["content-type"].startswith("text/csv")
    assert "exam_scores.csv" in export.headers["content-disposition"]
    rows = list(csv.reader(io.StringIO(export.text)))
    assert rows[0][0] == "Date"
    assert len(rows) == 3
    assert client.get("/api/scores/export").status_code == 200


def test_import_csv_upload(client):
    content = (
        "subject,question,option_a,option_b,option_c,option_d,correct_answer,explanation\n"
        "ภาษาไทย,q1,1,2,3,4,a,e\n"
        "ภาษาไทย,q2,1,2,3,4,z,e\n"
        "ภาษาไทย,q3,1,2\n"
    ).encode("utf-8")

    response = client.post("/api/import-csv", files={"csvFile": ("questions.csv", content, "text/csv")})

    assert response.status_code == 200
    assert response.json() == {"success": 1, "errors": 2}
    assert len(client.get("/api/questions").json()) == len(SAMPLE_QUESTIONS) + 1


def test_import_csv_requires_file(client):
    assert client.post("/api/import-csv").status_code == 422


def test_admin_login(client):
    ok = client.post("/api/admin/login", json={"username": "admin", "password": "s3cret"})
    assert ok.status_code == 200
    assert ok.json()["success"] is True
    assert ok.json()["token"].startswith("admin-token-")

    bad = client.post("/api/admin/login", json={"username": "admin", "password": "leo2568"})
    assert bad.status_code == 401


def test_admin_stats(client):
    client.post("/api/scores", json={
        "totalQuestions": 4, "correctAnswers": 3, "timeSpent": 100, "examType": "x",
    })

    stats = client.get("/api/admin/stats").json()

    assert stats == {
        "totalQuestions": len(SAMPLE_QUESTIONS),
        "totalExams": 1,
        "averageScore": 75,
        "averageTime": 100,
    }


def test_exam_session_flow(client):
    started = client.post("/api/exam-session/start", json={"type": "custom", "categories": {"ภาษาไทย": 1}})
    assert started.status_code == 200
    body = started.json()
    session = body["session"]
    assert session["status"] == "in_progress"
    assert body["remainingSeconds"] <= 600
    question = session["questions"][0]

    answered = client.post("/api/exam-session/answer", json={
        "session": session,
        "questionId": question["id"],
        "optionIndex": question["correctAnswerIndex"],
    }).json()["session"]

    bookmarked = client.post("/api/exam-session/bookmark", json={
        "session": answered,
        "questionId": question["id"],
    }).json()["session"]
    assert bookmarked["bookmarkedQuestionIds"] == [question["id"]]

    submitted = client.post("/api/exam-session/submit", json={"session": bookmarked}).json()
    assert submitted["session"]["status"] == "submitted"
    assert submitted["score"]["totalScore"] == 100
    assert submitted["remainingSeconds"] == 0

    again = client.post("/api/exam-session/submit", json={"session": submitted["session"]})
    assert again.status_code == 200
    assert again.json()["score"]["id"] == submitted["score"]["id"]

    late_answer = client.post("/api/exam-session/answer", json={
        "session": submitted["session"],
        "questionId": question["id"],
        "optionIndex": 0,
    })
    assert late_answer.status_code == 409
    assert len(client.get("/api/scores").json()) == 1


def test_exam_session_rejects_foreign_question(client):
    session = client.post("/api/exam-session/start", json={"type": "full"}).json()["session"]

    response = client.post("/api/exam-session/answer", json={
        "session": session,
        "questionId": "not-in-this-exam",
        "optionIndex": 0,
    })

    assert response.status_code == 400
