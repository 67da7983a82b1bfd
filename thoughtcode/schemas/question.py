"""Question Schemas — Pydantic models for the question API boundary.

Invariants:
    - QuestionCreate: every field optional; absent fields become NULL columns
    - QuestionUpdate: whereAsked key is required, null clears the category
    - QuestionResponse serializes with camelCase keys (descriptionUrl, whereAsked, ...)

Design Decisions:
    - AliasChoices accepts the legacy "descriptionURL" spelling alongside "descriptionUrl"
      and snake_case names: older clients keep working without a second endpoint
    - No field-level constraints beyond JSON type coercion: the table has none either
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class QuestionCreate(BaseModel):
    """Question creation payload."""
    title: str | None = None
    description_url: str | None = Field(
        None,
        validation_alias=AliasChoices(
            "descriptionUrl", "descriptionURL", "description_url",
        ),
    )
    description: str | None = None
    is_asked: bool | None = Field(
        None, validation_alias=AliasChoices("isAsked", "is_asked"),
    )
    coding_round: bool | None = Field(
        None, validation_alias=AliasChoices("codingRound", "coding_round"),
    )
    where_asked: str | None = Field(
        None, validation_alias=AliasChoices("whereAsked", "where_asked"),
    )


class QuestionUpdate(BaseModel):
    """Question update payload. Only the where-asked category is mutable."""
    where_asked: str | None = Field(
        ..., validation_alias=AliasChoices("whereAsked", "where_asked"),
    )


class QuestionResponse(BaseModel):
    """Question response — public-facing question data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str | None = None
    description_url: str | None = Field(None, serialization_alias="descriptionUrl")
    description: str | None = None
    is_asked: bool | None = Field(None, serialization_alias="isAsked")
    coding_round: bool | None = Field(None, serialization_alias="codingRound")
    where_asked: str | None = Field(None, serialization_alias="whereAsked")
    last_updated: datetime | None = Field(None, serialization_alias="lastUpdated")

    def to_json(self) -> dict:
        """JSON-ready dict keyed the way clients read it."""
        return self.model_dump(by_alias=True, mode="json")
