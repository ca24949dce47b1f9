"""Loading of ``config.toml`` and lookups into the loaded settings.

String values may reference the environment as ``${NAME}`` or
``${NAME:-fallback}``; an unset variable without a fallback becomes ``""``.
Relative paths in the file are taken relative to the file itself, so the
same config works from any working directory.
"""

import os
import re
from pathlib import Path
from typing import Any

import toml

CONFIG_ENV_VAR = "EZTAX_CONFIG"
CONFIG_FILENAME = "config.toml"
DEFAULT_KB_DIR = "kb"
DEFAULT_STORE_FILE = "vector_store.json"

_ENV_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::-(?P<fallback>[^}]*))?\}")
_PROJECT_ROOT = Path(__file__).resolve().parents[2]


def resolve_path(path: str | Path, config_path: Path) -> Path:
    """Anchor a relative ``path`` at the directory holding ``config_path``."""
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return (config_path.parent / candidate).resolve()


def find_config_path(explicit_path: Path | None = None) -> Path:
    """Locate the config file.

    Checked in order: ``explicit_path``, the ``EZTAX_CONFIG`` variable,
    ``config.toml`` in the working directory, then the one at the project root.

    Raises:
        FileNotFoundError: No candidate exists on disk.
    """
    if explicit_path:
        return explicit_path
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    for candidate in (Path(CONFIG_FILENAME), _PROJECT_ROOT / CONFIG_FILENAME):
        if candidate.exists():
            return candidate
    raise FileNotFoundError(
        f"{CONFIG_FILENAME} not found; pass --config or set {CONFIG_ENV_VAR}"
    )


def load_config(config_path: Path = Path(CONFIG_FILENAME)) -> dict[str, Any]:
    return _expand(toml.load(config_path))


def _expand(node: Any) -> Any:
    if isinstance(node, dict):
        return {key: _expand(child) for key, child in node.items()}
    if isinstance(node, list):
        return [_expand(child) for child in node]
    if isinstance(node, str):
        return _ENV_REFERENCE.sub(_lookup_env, node)
    return node


def _lookup_env(match: re.Match) -> str:
    return os.environ.get(match["name"], match["fallback"] or "")


def get_config_value(config: dict, key_path: str, default: Any = None) -> Any:
    """Read a nested setting such as ``"retrieval.top_k"``.

    Returns ``default`` as soon as a segment is missing or the value reached so
    far is not a table.
    """
    node: Any = config
    for segment in key_path.split("."):
        if not isinstance(node, dict) or segment not in node:
            return default
        node = node[segment]
    return node


def get_store_path(config: dict, config_path: Path) -> Path:
    """Where the JSON chunk store lives (``[storage] path``)."""
    return resolve_path(
        get_config_value(config, "storage.path", DEFAULT_STORE_FILE), config_path
    )


def get_kb_dir(config: dict, config_path: Path) -> Path:
    """Knowledge-base directory the store is built from (``[ingestion] directory``)."""
    return resolve_path(
        get_config_value(config, "ingestion.directory", DEFAULT_KB_DIR), config_path
    )
