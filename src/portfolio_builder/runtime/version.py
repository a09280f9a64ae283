"""Helpers for accessing the installed package version."""

from __future__ import annotations

import tomllib
from importlib import metadata as importlib_metadata
from pathlib import Path

from portfolio_builder.constants import DISTRIBUTION_NAME
from portfolio_builder.logging_utils import logger

_DEV_VERSION = "0.0.0"


def _pyproject_version(pyproject_path: Path) -> str | None:
    """Return the version declared by our own pyproject.toml, if any."""
    try:
        with pyproject_path.open("rb") as handle:
            project = tomllib.load(handle).get("project", {})
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Error reading %s: %s", pyproject_path, exc)
        return None

    # A checkout nested in another project must not report its version.
    if project.get("name") != DISTRIBUTION_NAME:
        return None
    version = project.get("version")
    if isinstance(version, str) and version.strip():
        return version.strip()
    return None


def resolve_project_version() -> str:
    """
    Return the best-guess project version without adding dependencies.

    Installed distribution metadata wins. Source checkouts fall back to the
    nearest pyproject.toml naming this project, and anything else reports
    "0.0.0".
    """
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        pass

    for parent in Path(__file__).resolve().parents:
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.is_file():
            version = _pyproject_version(pyproject_path)
            if version is not None:
                return version

    return _DEV_VERSION
