import importlib.metadata
import tomllib
from pathlib import Path
from typing import Optional

DISTRIBUTION_NAME = "ontovault"
PYPROJECT_PATH = Path(__file__).parent.parent / "pyproject.toml"


def _checkout_version(pyproject_path: Path) -> Optional[str]:
    """Version declared in the [project] table of a source checkout, if any"""
    try:
        with open(pyproject_path, "rb") as file:
            project = tomllib.load(file).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return None
    if project.get("name") != DISTRIBUTION_NAME:
        return None
    return project.get("version")


def get_ontovault_version(pyproject_path: Path = PYPROJECT_PATH) -> str:
    """
    Version shown in the run banner and by `ontovault --version`.

    A source checkout next to its pyproject.toml reports that version with a
    "-local" suffix; otherwise the installed distribution metadata is used.
    """
    version = _checkout_version(pyproject_path)
    if version:
        return f"{version}-local"
    try:
        return importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"
