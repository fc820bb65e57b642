"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Run configuration template for org-metadata-correlator.
# Replace every <REQUIRED> placeholder before running flows or object.
# Remove or keep <OPTIONAL> entries; omitted entries fall back to defaults.

snapshot:
  # Recorded org snapshot (YAML or JSON), relative to this file.
  path: "<REQUIRED>"

org:
  # Base URL used for setup deep links, for example https://example.my.salesforce.com
  instance_url: "<REQUIRED>"

bulk:
  # Per-item error codes dropped from bulk metadata reads instead of failing the run.
  tolerable_error_codes:
    - "UNKNOWN_EXCEPTION"
  # chunk_size: "<OPTIONAL>"
  # parallelism: "<OPTIONAL>"

correlation:
  # Worker count used when mapping rows to entities.
  # parallelism: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML run configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder run configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
