"""Question Schemas — alias handling, optional fields and camelCase output."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from thoughtcode.models.question import Question
from thoughtcode.schemas.question import (
    QuestionCreate, QuestionResponse, QuestionUpdate,
)


def test_create_accepts_camel_case_fields():
    body = QuestionCreate.model_validate({
        "title": "Two sum", "descriptionUrl": "http://x/1",
        "isAsked": False, "codingRound": True, "whereAsked": "A",
    })
    assert body.description_url == "http://x/1"
    assert body.is_asked is False
    assert body.coding_round is True
    assert body.where_asked == "A"


@pytest.mark.parametrize("key", ["descriptionUrl", "descriptionURL", "description_url"])
def test_create_accepts_every_description_url_spelling(key):
    assert QuestionCreate.model_validate({key: "http://x/1"}).description_url == "http://x/1"


def test_create_defaults_everything_to_none():
    body = QuestionCreate.model_validate({})
    assert body.model_dump() == {
        "title": None, "description_url": None, "description": None,
        "is_asked": None, "coding_round": None, "where_asked": None,
    }


def test_create_ignores_unknown_fields():
    body = QuestionCreate.model_validate({"id": 5, "lastUpdated": "yesterday"})
    assert not hasattr(body, "id")


def test_update_requires_where_asked_key():
    with pytest.raises(ValidationError):
        QuestionUpdate.model_validate({})
    assert QuestionUpdate.model_validate({"whereAsked": None}).where_asked is None


def test_response_serializes_camel_case_keys():
    stamp = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    question = Question(
        id=3, title="T", description_url="http://x/1", description=None,
        is_asked=True, coding_round=False, where_asked="A", last_updated=stamp,
    )
    assert QuestionResponse.model_validate(question).to_json() == {
        "id": 3,
        "title": "T",
        "descriptionUrl": "http://x/1",
        "description": None,
        "isAsked": True,
        "codingRound": False,
        "whereAsked": "A",
        "lastUpdated": "2024-01-02T03:04:05Z",
    }
