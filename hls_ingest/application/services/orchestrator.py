"""Fans a source asset out into concurrent rendition jobs and settles the batch."""

import asyncio
import shutil
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from hls_ingest.application.services.layout import OutputLayout
from hls_ingest.application.services.publisher import AssetRecordPublisher
from hls_ingest.application.services.rendition_runner import RenditionJobRunner
from hls_ingest.application.services.thumbnail_runner import ThumbnailJobRunner
from hls_ingest.commons.telemetry import LogContext, get_logger, timed
from hls_ingest.domain.exceptions import (
    AllRenditionsFailedException,
    CleanupFailedException,
    OrchestrationException,
    ThumbnailRequiredException,
)
from hls_ingest.domain.models.asset import Asset, AssetRecord
from hls_ingest.domain.models.outcome import RenditionJobOutcome, ThumbnailOutcome
from hls_ingest.domain.models.profile import RenditionProfile


class ThumbnailPolicy(str, Enum):
    """How a failed thumbnail affects the batch.

    OPTIONAL: the record is published without a thumbnail.
    REQUIRED: the batch fails and is cleaned up like a total failure.
    """

    OPTIONAL = "optional"
    REQUIRED = "required"


DEFAULT_THUMBNAIL_POLICY = ThumbnailPolicy.OPTIONAL


@dataclass(frozen=True)
class QuorumDecision:
    """Outcome of a batch, computed purely from job outcomes."""

    succeeded: dict[str, str]
    failed: tuple[str, ...]
    thumbnail_url: str | None
    thumbnail_error: str | None = None
    thumbnail_missing_is_fatal: bool = False

    @property
    def is_success(self) -> bool:
        return bool(self.succeeded) and not self.thumbnail_missing_is_fatal


def decide_quorum(
    outcomes: Iterable[RenditionJobOutcome],
    thumbnail: ThumbnailOutcome,
    policy: ThumbnailPolicy = DEFAULT_THUMBNAIL_POLICY,
) -> QuorumDecision:
    """Partition outcomes and apply the at-least-one-success rule.

    The result does not depend on the order of ``outcomes``.
    """
    succeeded: dict[str, str] = {}
    failed: list[str] = []
    for outcome in sorted(outcomes, key=lambda o: o.profile_name):
        if outcome.succeeded and outcome.locator is not None:
            succeeded[outcome.profile_name] = outcome.locator
        else:
            failed.append(outcome.profile_name)

    return QuorumDecision(
        succeeded=succeeded,
        failed=tuple(failed),
        thumbnail_url=thumbnail.locator if thumbnail.succeeded else None,
        thumbnail_error=None if thumbnail.succeeded else thumbnail.error,
        thumbnail_missing_is_fatal=(
            policy == ThumbnailPolicy.REQUIRED and not thumbnail.succeeded
        ),
    )


class RenditionOrchestrator:
    """Runs every rendition job plus the thumbnail job for one asset.

    All jobs are started together and awaited together; a failing or slow
    job never cancels its siblings. With no successful rendition the source
    file and the asset's whole output namespace are deleted, otherwise the
    record is published and every produced file is kept.
    """

    def __init__(
        self,
        rendition_runner: RenditionJobRunner,
        thumbnail_runner: ThumbnailJobRunner,
        publisher: AssetRecordPublisher,
        layout: OutputLayout,
        thumbnail_policy: ThumbnailPolicy = DEFAULT_THUMBNAIL_POLICY,
    ) -> None:
        self._rendition_runner = rendition_runner
        self._thumbnail_runner = thumbnail_runner
        self._publisher = publisher
        self._layout = layout
        self._thumbnail_policy = thumbnail_policy
        self._logger = get_logger(__name__)

    @timed
    async def process(
        self,
        asset: Asset,
        profiles: Sequence[RenditionProfile],
    ) -> AssetRecord:
        """Produce and publish the renditions of ``asset``.

        Args:
            asset: Ingested asset; its source file is owned by this call.
            profiles: Profiles to encode, with unique names.

        Returns:
            The published record (possibly a subset of ``profiles``).

        Raises:
            AllRenditionsFailedException: No rendition succeeded.
            ThumbnailRequiredException: Thumbnail failed under the REQUIRED policy.
            PersistException: Renditions succeeded but the record write failed.
        """
        names = [p.name for p in profiles]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate profile names in batch: {names}")

        with LogContext(asset_id=asset.asset_id):
            self._logger.info(
                "Starting rendition batch",
                extra={"profiles": names, "source": str(asset.source_path)},
            )
            await self._prepare_namespace(asset, profiles)

            thumbnail, *outcomes = await asyncio.gather(
                self._capture_thumbnail(asset),
                *(self._encode(asset, profile) for profile in profiles),
            )

            decision = decide_quorum(outcomes, thumbnail, self._thumbnail_policy)
            self._logger.info(
                "Rendition batch settled",
                extra={
                    "succeeded": sorted(decision.succeeded),
                    "failed": list(decision.failed),
                    "thumbnail": decision.thumbnail_url is not None,
                },
            )

            if not decision.is_success:
                error = self._failure_for(asset, decision)
                await self._discard(asset)
                self._logger.error("Rendition batch failed", extra={"reason": error.reason})
                raise error

            record = AssetRecord(
                asset_id=asset.asset_id,
                rendition_urls=decision.succeeded,
                thumbnail_url=decision.thumbnail_url,
            )
            await self._publisher.publish(record)
            return record

    async def _prepare_namespace(
        self, asset: Asset, profiles: Sequence[RenditionProfile]
    ) -> None:
        directories = [
            self._layout.rendition_dir(asset.asset_id, p.name) for p in profiles
        ]
        directories.append(self._layout.namespace(asset.asset_id))

        def make_all() -> None:
            for directory in directories:
                directory.mkdir(parents=True, exist_ok=True)

        loop = asyncio.get_event_loop()
        try:
            await loop.run_in_executor(None, make_all)
        except OSError as e:
            # Each runner creates its own directory again and reports the failure.
            self._logger.warning(
                "Could not prepare output namespace", extra={"error": str(e)}
            )

    async def _encode(
        self, asset: Asset, profile: RenditionProfile
    ) -> RenditionJobOutcome:
        try:
            return await self._rendition_runner.run(
                asset.source_path,
                self._layout.rendition_dir(asset.asset_id, profile.name),
                profile,
            )
        except Exception as e:
            self._logger.exception(
                "Rendition job crashed", extra={"profile": profile.name}
            )
            return RenditionJobOutcome.failure(profile.name, f"job crashed: {e!r}")

    async def _capture_thumbnail(self, asset: Asset) -> ThumbnailOutcome:
        try:
            return await self._thumbnail_runner.run(
                asset.source_path,
                self._layout.thumbnail_path(asset.asset_id),
            )
        except Exception as e:
            self._logger.exception("Thumbnail job crashed")
            return ThumbnailOutcome.failure(f"job crashed: {e!r}")

    @staticmethod
    def _failure_for(asset: Asset, decision: QuorumDecision) -> OrchestrationException:
        if not decision.succeeded:
            return AllRenditionsFailedException(asset.asset_id, decision.failed)
        return ThumbnailRequiredException(asset.asset_id, decision.thumbnail_error)

    async def _discard(self, asset: Asset) -> list[CleanupFailedException]:
        """Delete the source and the whole output namespace, best effort."""
        namespace = self._layout.namespace(asset.asset_id)
        loop = asyncio.get_event_loop()
        failures = await loop.run_in_executor(
            None, _remove_artifacts, asset.asset_id, asset.source_path, namespace
        )
        for failure in failures:
            self._logger.error(
                "Cleanup failed",
                extra={"path": failure.path, "cause": failure.cause},
            )
        return failures


def _remove_artifacts(
    asset_id: str, source_path: Path, namespace: Path
) -> list[CleanupFailedException]:
    failures: list[CleanupFailedException] = []

    try:
        source_path.unlink(missing_ok=True)
    except OSError as e:
        failures.append(CleanupFailedException(asset_id, str(source_path), str(e)))

    if namespace.exists():
        try:
            shutil.rmtree(namespace)
        except OSError as e:
            failures.append(CleanupFailedException(asset_id, str(namespace), str(e)))

    return failures
