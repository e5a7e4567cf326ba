"""Terminal outcomes of individual rendition and thumbnail jobs."""

from enum import Enum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class JobStatus(str, Enum):
    """Terminal state of a job."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


class _JobOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: JobStatus
    locator: str | None = Field(
        default=None,
        description="Where the produced artifact is served from (success only)",
    )
    error: str | None = Field(
        default=None,
        description="Failure cause (failure only)",
    )

    @model_validator(mode="after")
    def check_payload(self) -> Self:
        """A success carries a locator and no error, a failure the reverse."""
        if self.status == JobStatus.SUCCEEDED and not self.locator:
            raise ValueError("succeeded outcome requires a locator")
        if self.status == JobStatus.FAILED and self.locator is not None:
            raise ValueError("failed outcome must not carry a locator")
        return self

    @property
    def succeeded(self) -> bool:
        return self.status == JobStatus.SUCCEEDED


class RenditionJobOutcome(_JobOutcome):
    """Result of encoding one profile."""

    profile_name: str

    @classmethod
    def success(cls, profile_name: str, locator: str) -> Self:
        return cls(profile_name=profile_name, status=JobStatus.SUCCEEDED, locator=locator)

    @classmethod
    def failure(cls, profile_name: str, error: str) -> Self:
        return cls(profile_name=profile_name, status=JobStatus.FAILED, error=error)


class ThumbnailOutcome(_JobOutcome):
    """Result of capturing the preview thumbnail."""

    @classmethod
    def success(cls, locator: str) -> Self:
        return cls(status=JobStatus.SUCCEEDED, locator=locator)

    @classmethod
    def failure(cls, error: str) -> Self:
        return cls(status=JobStatus.FAILED, error=error)
