"""Wire models for the skills service using Pydantic."""

from typing import List, Optional
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, Field, TypeAdapter, field_validator


class Skill(BaseModel):
    """A named capability stored by the skills service.

    ``id`` and the timestamps are assigned by the server. They are left unset
    on skills built client-side and are omitted from request bodies until set.
    """

    id: Optional[UUID] = Field(None, description="Server-assigned skill ID")
    name: str = Field("", description="Skill name")
    description: str = Field("", description="Skill description")
    created_at: Optional[AwareDatetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[AwareDatetime] = Field(None, description="Last update timestamp")

    @field_validator("name", "description", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        if v is None:
            return ""
        return v

    def to_payload(self) -> bytes:
        """Serialize to the JSON request body, dropping unset server fields."""
        return self.model_dump_json(exclude_none=True).encode("utf-8")


class SkillProject(BaseModel):
    """Association record linking a skill to a project."""

    skill_id: UUID = Field(..., description="Skill ID")
    project_id: UUID = Field(..., description="Project ID")

    def to_payload(self) -> bytes:
        return self.model_dump_json().encode("utf-8")


# Adapters for response bodies. A JSON null reads as an empty skill or list.
SKILL_ADAPTER: TypeAdapter[Optional[Skill]] = TypeAdapter(Optional[Skill])
SKILL_LIST_ADAPTER: TypeAdapter[Optional[List[Skill]]] = TypeAdapter(Optional[List[Skill]])
UUID_LIST_ADAPTER: TypeAdapter[Optional[List[UUID]]] = TypeAdapter(Optional[List[UUID]])
