"""Asset identifier value object."""

from __future__ import annotations

import re
from typing import Annotated
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hls_ingest.domain.exceptions import InvalidAssetIdException

# Used verbatim as a directory name, so no separators, dots or whitespace.
ASSET_ID_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_-]{0,127}")


class AssetId(BaseModel):
    """Opaque, filesystem-path-safe identifier for an uploaded asset.

    Examples:
        >>> AssetId(value="3f1c0b7e-9a4d-4c55-8a55-8f3e4c2b1d10").value
        '3f1c0b7e-9a4d-4c55-8a55-8f3e4c2b1d10'
        >>> AssetId.parse("../etc")
        Traceback (most recent call last):
        ...
        hls_ingest.domain.exceptions.InvalidAssetIdException: Invalid asset id: '../etc'
    """

    model_config = ConfigDict(frozen=True)

    value: Annotated[str, Field(min_length=1, max_length=128)]

    @field_validator("value")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Reject anything that could escape a per-asset directory."""
        if not ASSET_ID_PATTERN.fullmatch(v):
            msg = (
                f"Invalid asset id format: '{v}'. "
                "Use letters, digits, underscore or hyphen."
            )
            raise ValueError(msg)
        return v

    @classmethod
    def generate(cls) -> AssetId:
        """Create a fresh random identifier."""
        return cls(value=str(uuid4()))

    @classmethod
    def parse(cls, raw: str) -> AssetId:
        """Validate a raw string, raising the domain exception on failure."""
        if not isinstance(raw, str) or not ASSET_ID_PATTERN.fullmatch(raw):
            raise InvalidAssetIdException(str(raw))
        return cls(value=raw)

    def __str__(self) -> str:
        return self.value
