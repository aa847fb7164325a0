"""Pydantic configuration model for the constructor.

Defaults are baked in here; callers only pass the fields they override.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class ConstructorConfig(BaseModel):
    """Options for a BaseConstructor, frozen after construction."""

    model_config = {"frozen": True}

    # How zoned timestamps are represented, see yamlbuild.scalars.parse_timestamp
    timestamp_policy: Literal["local", "utc", "offset"] = "local"
    # Fixed local UTC offset for the "local" policy; None means the process timezone
    local_utc_offset_minutes: Optional[int] = Field(default=None, gt=-24 * 60, lt=24 * 60)
    # Deepest node nesting accepted before NestingDepthError, capped below
    # the interpreter recursion limit
    max_depth: int = Field(default=128, gt=0, le=150)
    # Case applied to the first character of object property names
    property_case: Literal["lower", "upper", "preserve"] = "lower"
    # Decode plain ":name" scalars to Symbol in primitive construction
    symbols: bool = True
