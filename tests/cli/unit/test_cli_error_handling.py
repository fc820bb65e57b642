"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from org_metadata_correlator.cli import main

SAMPLE_SNAPSHOT = Path(__file__).resolve().parents[3] / "samples" / "org-snapshot.yaml"


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["flows", "--output", "/tmp/flows.json"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--config" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["object", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option" in captured.err
    assert "--bogus" in captured.err
    assert "Traceback" not in captured.err


def test_missing_configuration_file_is_reported_without_traceback(
    tmp_path: Path, capsys
) -> None:
    exit_code = main(["flows", "--config", str(tmp_path / "absent.yaml")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Configuration file not found" in captured.err
    assert "Traceback" not in captured.err


def test_existing_config_file_is_not_overwritten(tmp_path: Path, capsys) -> None:
    existing = tmp_path / "config.yaml"
    existing.write_text("keep: me\n", encoding="utf-8")

    exit_code = main(["generate-config", "--output", str(existing)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "already exists" in captured.err
    assert existing.read_text(encoding="utf-8") == "keep: me\n"


@pytest.mark.parametrize("filename", ["flows.json", "flows.xlsx"])
def test_unwritable_output_path_is_reported_without_traceback(
    tmp_path: Path, capsys, filename: str
) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        f"snapshot:\n  path: {SAMPLE_SNAPSHOT}\n"
        "org:\n  instance_url: https://acme.my.salesforce.com\n",
        encoding="utf-8",
    )
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory\n", encoding="utf-8")

    exit_code = main(
        ["flows", "--config", str(config_path), "--output", str(blocker / filename)]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Failed to write output file" in captured.err
    assert "Traceback" not in captured.err
