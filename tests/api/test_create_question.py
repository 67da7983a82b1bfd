"""Create Question — verifies inserts, NULL pass-through and body rejection.

Invariants:
    - POST returns 200 with an empty body
    - Absent fields are stored as NULL
    - lastUpdated is server-assigned, never earlier than the request
    - Non-JSON or non-object bodies return 400 and insert nothing
"""

from datetime import datetime, timezone

from sqlalchemy import func, select

from thoughtcode.models.question import Question


async def _count(test_db) -> int:
    result = await test_db.execute(select(func.count()).select_from(Question))
    return result.scalar_one()


async def test_create_then_list_includes_submitted_fields(client):
    before = datetime.now(timezone.utc)
    res = await client.post("/api/v1/questions", json={
        "descriptionUrl": "http://x/1", "codingRound": True, "whereAsked": "A",
    })
    assert res.status_code == 200
    assert res.content == b""

    listed = (await client.get("/api/v1/questions")).json()
    assert len(listed) == 1
    record = listed[0]
    assert record["descriptionUrl"] == "http://x/1"
    assert record["codingRound"] is True
    assert record["whereAsked"] == "A"
    assert isinstance(record["id"], int)
    stamp = datetime.fromisoformat(record["lastUpdated"].replace("Z", "+00:00"))
    assert stamp >= before.replace(microsecond=0)


async def test_absent_fields_are_stored_as_null(client, test_db):
    res = await client.post("/api/v1/questions", json={"title": "Only a title"})
    assert res.status_code == 200

    question = (await test_db.execute(select(Question))).scalar_one()
    assert question.title == "Only a title"
    assert question.description_url is None
    assert question.description is None
    assert question.is_asked is None
    assert question.coding_round is None
    assert question.where_asked is None
    assert question.last_updated is not None


async def test_empty_object_creates_blank_question(client, test_db):
    res = await client.post("/api/v1/questions", json={})
    assert res.status_code == 200
    assert await _count(test_db) == 1


async def test_legacy_description_url_spelling_accepted(client, test_db):
    res = await client.post("/api/v1/questions", json={
        "descriptionURL": "http://x/legacy", "isAsked": True,
        "description": "Reverse a list",
    })
    assert res.status_code == 200

    question = (await test_db.execute(select(Question))).scalar_one()
    assert question.description_url == "http://x/legacy"
    assert question.is_asked is True
    assert question.description == "Reverse a list"


async def test_unparseable_body_returns_400_without_insert(client, test_db):
    res = await client.post(
        "/api/v1/questions",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert await _count(test_db) == 0


async def test_missing_body_returns_400(client, test_db):
    res = await client.post("/api/v1/questions")
    assert res.status_code == 400
    assert await _count(test_db) == 0


async def test_json_array_body_returns_400(client, test_db):
    res = await client.post("/api/v1/questions", json=[{"title": "x"}])
    assert res.status_code == 400
    assert await _count(test_db) == 0


async def test_wrong_field_type_returns_400(client, test_db):
    res = await client.post("/api/v1/questions", json={"codingRound": {"a": 1}})
    assert res.status_code == 400
    details = res.json()["error"]["details"]
    assert any("codingRound" in d["field"] for d in details)
    assert await _count(test_db) == 0


async def test_cors_headers_allow_any_origin(client):
    res = await client.options(
        "/api/v1/questions",
        headers={
            "Origin": "http://elsewhere.example",
            "Access-Control-Request-Method": "PATCH",
        },
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] in ("*", "http://elsewhere.example")
    assert "PATCH" in res.headers["access-control-allow-methods"]
