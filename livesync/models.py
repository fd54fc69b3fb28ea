# livesync/models.py
from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _FileOperation(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_name: str = Field(..., min_length=1, description="Path relative to the sandbox root")

    @field_validator("file_name")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("file_name must not be blank")
        return v


class DeleteOperation(_FileOperation):
    kind: Literal["delete"] = "delete"


class CreateOperation(_FileOperation):
    kind: Literal["create"] = "create"
    content: bytes = Field(b"", description="Complete file body")


Operation = Union[DeleteOperation, CreateOperation]
