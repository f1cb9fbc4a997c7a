"""
Project metadata helpers used by the logging formatters.

The service name and version stamped on every JSON log line come from the
nearest pyproject.toml, or from the installed distribution metadata when the
package has been installed (containers, wheels).
"""
from pathlib import Path
from importlib import metadata as importlib_metadata
from typing import Any
import tomllib


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    p = start
    for _ in range(max_up):
        candidate = p / "pyproject.toml"
        if candidate.exists():
            return candidate
        if p.parent == p:
            break
        p = p.parent
    return None


def get_pyproject_value(key: str, start: Path | None = None, max_up: int = 5, default: Any = None) -> Any:
    """
    Return the value for a dot-separated `key` (e.g. "project.version") from the
    nearest pyproject.toml, or `default` when the file or key is missing.
    """
    start_path = start or Path(__file__).resolve().parent
    pyproject = find_pyproject(start_path, max_up=max_up)
    if pyproject is None:
        return default

    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return default

    cur: Any = data
    for part in key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def get_project_name(default: str = "hotel-listing-api") -> str:
    return get_pyproject_value("project.name", default=default)


def get_project_version(default: str = "unknown") -> str:
    """
    Prefer the installed distribution's version; fall back to pyproject.toml.
    """
    name = get_project_name()
    try:
        return importlib_metadata.version(name)
    except importlib_metadata.PackageNotFoundError:
        pass
    return get_pyproject_value("project.version", default=default)


__all__ = [
    "find_pyproject",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
