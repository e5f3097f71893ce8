"""Request and response schemas shared by the SDK and the CLI."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RoleDefinition(BaseModel):
    """Role request body; service-defined fields pass through untouched."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    comment: Optional[str] = None


class RoleUpdate(RoleDefinition):
    name: Optional[str] = Field(None, min_length=1)


class ConfigDownloadHandle(BaseModel):
    model_config = ConfigDict(extra="ignore")

    session_id: str = Field(..., min_length=1)
