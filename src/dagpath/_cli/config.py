"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path


class ConfigError(Exception):
    """Error in dagpath configuration."""


@dataclass(slots=True, frozen=True)
class DagpathConfig:
    """Configuration loaded from the ``[tool.dagpath]`` section of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    input: Path | None = None
    output: Path | None = None
    node_capacity: int | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_path(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.dagpath].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


def load_config(pyproject_path: Path) -> DagpathConfig:
    """Load and validate [tool.dagpath] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed DagpathConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    dagpath_section = data.get("tool", {}).get("dagpath", {})
    if not dagpath_section:
        return DagpathConfig(project_root=project_root)

    node_capacity: int | None = None
    if "node_capacity" in dagpath_section:
        value = dagpath_section["node_capacity"]
        # bool is a subclass of int
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            msg = "Invalid [tool.dagpath].node_capacity: expected positive integer"
            raise ConfigError(msg)
        node_capacity = value

    return DagpathConfig(
        input=_parse_path(dagpath_section, "input", project_root),
        output=_parse_path(dagpath_section, "output", project_root),
        node_capacity=node_capacity,
        project_root=project_root,
    )


def get_config() -> DagpathConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        DagpathConfig (may be empty if no pyproject.toml or no [tool.dagpath] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return DagpathConfig()
    return load_config(pyproject_path)
