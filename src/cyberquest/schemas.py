"""Shared Pydantic base and field types.

The wire format is camelCase (``userId``, ``totalScore``). Inputs accept
camelCase or snake_case.
"""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import Path
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Counters and scores are int4 columns; ids are int8.
INT32_MAX = 2**31 - 1
INT64_MAX = 2**63 - 1

NonNegativeInt = Annotated[int, Field(ge=0, le=INT32_MAX, strict=True)]
PositiveInt = Annotated[int, Field(ge=1, le=INT32_MAX, strict=True)]
EntityId = Annotated[int, Field(ge=1, le=INT64_MAX, strict=True)]
PathId = Annotated[int, Path(ge=1, le=INT64_MAX)]

Team = Literal["red", "white"]
Difficulty = Literal["easy", "medium", "hard"]
LabType = Literal["phishing", "malware", "social_engineering"]


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(ApiModel):
    success: bool = True
