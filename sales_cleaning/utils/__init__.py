"""Filesystem helpers for locating pipeline.toml and preparing output dirs."""

from pathlib import Path


def get_workspace_root() -> Path:
    """Directory holding pipeline.toml, one level above the package."""
    return Path(__file__).parent.parent.parent


def ensure_dir(path: Path) -> None:
    """Create ``path`` and its parents if missing."""
    path.mkdir(parents=True, exist_ok=True)
