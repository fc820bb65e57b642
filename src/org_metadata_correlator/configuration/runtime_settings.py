"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SnapshotSettings:
    """Location of the recorded org snapshot serving all collaborator calls."""

    path: Path


@dataclass(frozen=True)
class OrgSettings:
    """Org addressing used when building setup deep links."""

    instance_url: str


@dataclass(frozen=True)
class BulkSettings:
    """Bulk metadata retrieval tuning and failure tolerance."""

    tolerable_error_codes: tuple[str, ...]
    chunk_size: int
    parallelism: int


@dataclass(frozen=True)
class CorrelationSettings:
    """Worker count used when mapping rows to entities."""

    parallelism: int


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    snapshot: SnapshotSettings
    org: OrgSettings
    bulk: BulkSettings
    correlation: CorrelationSettings
