"""Ad hoc SMS schemas."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import blank_to_none, coerce_to_str


class SendSMSRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    to: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1, max_length=918)  # 6 concatenated GSM-7 segments
    name: str | None = None

    @field_validator("to", mode="before")
    @classmethod
    def _to_as_text(cls, v):
        return coerce_to_str(v)

    @field_validator("name", mode="before")
    @classmethod
    def _blank_name(cls, v):
        return blank_to_none(v)


class SendSMSResponse(BaseModel):
    success: bool
    message: str
    data: dict[str, Any] | None = None


class CannedSMSResponse(BaseModel):
    success: bool
    message: str
    to: str
    result: dict[str, Any] | None = None
