from __future__ import annotations

import uuid
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


EntityType = Literal["College", "Department", "Program", "Level", "Course"]
OutcomeStatus = Literal["created", "existing", "failed"]


class AnalyzedEntity(BaseModel):
    """One entity extracted from an uploaded document.

    `id` and `parentId` are batch-local: they only link entities of the same
    request and are never stored. `confidence`, `reasoning`, `status` and
    `suggestions` are carried for the review UI and ignored on save.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    type: EntityType
    name: str = Field(min_length=1)
    properties: dict[str, Any] = Field(default_factory=dict)
    parent_id: str | None = Field(default=None, alias="parentId")
    confidence: float = Field(default=1.0, ge=0, le=1)
    reasoning: str = ""
    status: Literal["new", "matched", "ambiguous", "error"] = "new"
    suggestions: list[str] | None = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("properties", mode="before")
    @classmethod
    def _default_properties(cls, v: Any) -> Any:
        return {} if v is None else v


class AnalyzedImportRequest(BaseModel):
    entities: list[AnalyzedEntity] = Field(default_factory=list)


class EntityOutcome(BaseModel):
    id: str
    type: EntityType
    status: OutcomeStatus
    persisted_id: uuid.UUID | None = None
    reason: str | None = None


class ImportResult(BaseModel):
    success: bool
    message: str
    created: int = 0
    outcomes: list[EntityOutcome] = Field(default_factory=list)
