import json

import pytest
from pydantic import ValidationError
from sqlmodel import select

from projectcode.models import InterviewQuestion
from projectcode.scripts.bulk_load_questions import bulk_load, load_questions

QUESTIONS = [
    {"question": "Tell me about a conflict you resolved.", "category": "Behavioral", "type": "General", "difficulty": "Easy"},
    {
        "question": "How does an index speed up a query?",
        "category": "Technical",
        "type": "Backend",
        "difficulty": "Medium",
        "company": "Acme",
        "tags": ["databases"],
    },
]


def test_bulk_load_inserts_every_question(session, tmp_path):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps(QUESTIONS), encoding="utf-8")

    assert bulk_load(session, path) == 2

    stored = session.exec(select(InterviewQuestion)).all()
    assert {q.difficulty for q in stored} == {"Easy", "Medium"}
    assert [q.tags for q in stored if q.company == "Acme"] == [["databases"]]


def test_invalid_category_is_rejected(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps([dict(QUESTIONS[0], category="Trivia")]), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_questions(path)
