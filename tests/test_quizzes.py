from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi import HTTPException

import medilearn.services.quiz_engine as quiz_engine
from medilearn.models.quiz import AnswerRequest
from medilearn.services.quiz_engine import QUIZZES, QuizEngine

ANATOMY = QUIZZES[0]


def _correct(question_id):
    return next(q.correct_answer for q in ANATOMY.questions if q.id == question_id)


def test_list_quizzes_hides_answers(test_client):
    r = test_client.get("/api/quizzes")
    assert r.status_code == 200
    items = r.json()["items"]
    assert items[0]["id"] == "anatomy-basics"
    assert items[0]["questionCount"] == len(ANATOMY.questions)
    assert "questions" not in items[0]


def test_quiz_flow(test_client):
    r = test_client.post("/api/quizzes/anatomy-basics/start")
    assert r.status_code == 200, r.text
    start = r.json()
    sid = start["sessionId"]
    q = start["question"]
    assert "correctAnswer" not in q

    answers = []
    while q is not None:
        # every other answer wrong
        choice = _correct(q["id"]) if len(answers) % 2 == 0 else next(o for o in q["options"] if o != _correct(q["id"]))
        r = test_client.post(f"/api/quizzes/sessions/{sid}/answer", json={"questionId": q["id"], "answer": choice})
        assert r.status_code == 200, r.text
        ans = r.json()
        assert ans["isCorrect"] is (choice == ans["correctAnswer"])
        answers.append(ans)
        q = ans["nextQuestion"]

    res = test_client.get(f"/api/quizzes/sessions/{sid}/result").json()
    assert res["finished"] is True
    assert res["total"] == 5
    assert res["score"] == 3
    assert all(d["chosenAnswer"] is not None for d in res["details"])


def test_answer_validation(test_client):
    start = test_client.post("/api/quizzes/nutrition-basics/start").json()
    sid, q = start["sessionId"], start["question"]

    r = test_client.post(f"/api/quizzes/sessions/{sid}/answer", json={"questionId": "other", "answer": q["options"][0]})
    assert r.status_code == 400

    r = test_client.post(f"/api/quizzes/sessions/{sid}/answer", json={"questionId": q["id"], "answer": "not an option"})
    assert r.status_code == 400


def test_unknown_quiz_and_session(test_client):
    assert test_client.post("/api/quizzes/nope/start").status_code == 404
    assert test_client.get("/api/quizzes/sessions/nope/result").status_code == 404


def test_finished_quiz_is_recorded_for_signed_in_user(test_client, registered_user):
    start = test_client.post("/api/quizzes/heart-health/start").json()
    sid, q = start["sessionId"], start["question"]
    while q is not None:
        r = test_client.post(f"/api/quizzes/sessions/{sid}/answer", json={"questionId": q["id"], "answer": q["options"][0]})
        q = r.json()["nextQuestion"]

    # one real attempt replaces the sample count of 5
    assert test_client.get("/api/user/stats").json()["quizzesTaken"] == 1

    r = test_client.post(f"/api/quizzes/sessions/{sid}/answer", json={"questionId": "h1", "answer": "60-100 bpm"})
    assert r.status_code == 400


def test_expired_session(monkeypatch):
    engine = QuizEngine(ttl_seconds=10)
    start = engine.start("anatomy-basics")

    real_time = quiz_engine.time.time
    monkeypatch.setattr(quiz_engine.time, "time", lambda: real_time() + 60)

    with pytest.raises(HTTPException) as exc:
        engine.result(start.sessionId)
    assert exc.value.status_code == 404


def test_concurrent_last_answers_finish_once():
    engine = QuizEngine()
    start = engine.start("heart-health")
    sid, q = start.sessionId, start.question
    for _ in range(start.total - 1):
        q = engine.answer(sid, AnswerRequest(questionId=q.id, answer=q.options[0])).nextQuestion

    def _answer(_):
        try:
            return engine.answer(sid, AnswerRequest(questionId=q.id, answer=q.options[0])).nextQuestion is None
        except HTTPException as e:
            return e.status_code

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(_answer, range(8)))

    assert outcomes.count(True) == 1
    assert outcomes.count(400) == 7
