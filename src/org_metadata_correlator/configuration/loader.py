"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from org_metadata_correlator.bulk_retrieval import DEFAULT_CHUNK_SIZE, DEFAULT_TOLERABLE_ERROR_CODES
from org_metadata_correlator.correlation import DEFAULT_MAPPING_WORKERS

from .runtime_settings import (
    BulkSettings,
    Configuration,
    CorrelationSettings,
    OrgSettings,
    SnapshotSettings,
)

DEFAULT_BULK_PARALLELISM = 4


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        snapshot=_parse_snapshot_section(parsed.get("snapshot"), path.parent),
        org=_parse_org_section(parsed.get("org")),
        bulk=_parse_bulk_section(parsed.get("bulk")),
        correlation=_parse_correlation_section(parsed.get("correlation")),
    )


def _parse_snapshot_section(value: Any, base_path: Path) -> SnapshotSettings:
    section = _require_mapping(value, "snapshot")
    raw_path = _require_non_empty_string(section.get("path"), "snapshot.path")
    snapshot_path = _resolve_path(base_path, raw_path)
    if not snapshot_path.exists():
        raise ConfigurationError(f"Snapshot file not found: {snapshot_path}")
    return SnapshotSettings(path=snapshot_path)


def _parse_org_section(value: Any) -> OrgSettings:
    section = _require_mapping(value, "org")
    instance_url = _require_non_empty_string(section.get("instance_url"), "org.instance_url")
    if not instance_url.startswith(("https://", "http://")):
        raise ConfigurationError("org.instance_url must be an http(s) URL.")
    return OrgSettings(instance_url=instance_url.rstrip("/"))


def _parse_bulk_section(value: Any) -> BulkSettings:
    section = _optional_mapping(value, "bulk")
    tolerable_error_codes = _normalize_error_codes(
        section.get("tolerable_error_codes", list(DEFAULT_TOLERABLE_ERROR_CODES))
    )
    chunk_size = _require_positive_int(
        section.get("chunk_size", DEFAULT_CHUNK_SIZE), "bulk.chunk_size"
    )
    parallelism = _require_positive_int(
        section.get("parallelism", DEFAULT_BULK_PARALLELISM), "bulk.parallelism"
    )
    return BulkSettings(
        tolerable_error_codes=tolerable_error_codes,
        chunk_size=chunk_size,
        parallelism=parallelism,
    )


def _parse_correlation_section(value: Any) -> CorrelationSettings:
    section = _optional_mapping(value, "correlation")
    parallelism = _require_positive_int(
        section.get("parallelism", DEFAULT_MAPPING_WORKERS), "correlation.parallelism"
    )
    return CorrelationSettings(parallelism=parallelism)


def _normalize_error_codes(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError("bulk.tolerable_error_codes entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError("bulk.tolerable_error_codes must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
