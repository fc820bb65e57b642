"""Module entry point for `python -m org_metadata_correlator`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
