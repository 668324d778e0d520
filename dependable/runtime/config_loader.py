"""Loading of dependable configuration from TOML/JSON sources.

`load_config` accepts None (defaults), an already-parsed mapping, a path to
a ``.json``/``.toml`` file, or an inline JSON/TOML string. Settings may sit
at the top level or under a ``[dependable]`` table.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Union

from dependable.config.schema import DependableConfig

logger = logging.getLogger("dependable.runtime.config_loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]

_SECTION = "dependable"


def _decode(text: str, is_json: bool) -> Dict[str, Any]:
    data = json.loads(text) if is_json else tomllib.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Top-level configuration must be a mapping/dict")
    return data


def _read(source: Union[str, Path]) -> Dict[str, Any]:
    path = Path(source)
    if path.is_file():
        is_json = path.suffix.lower() == ".json"
        logger.info("Loading configuration from file: %s", path)
        return _decode(path.read_text(encoding="utf-8"), is_json)

    # Not a file: inline text, JSON when it opens with a bracket
    text = str(source)
    is_json = text.lstrip().startswith(("{", "["))
    logger.info("Loading configuration from inline %s string", "json" if is_json else "toml")
    return _decode(text, is_json)


def load_config(source: ConfigSource) -> DependableConfig:
    """Build a DependableConfig from a configuration source.

    Args:
        source: None, a mapping, a config file path, or inline JSON/TOML.

    Returns:
        DependableConfig instance.

    Raises:
        ValueError: If the source does not decode to a mapping.
        ValidationError: If the mapping is not a valid configuration.
        OSError: If a configuration file cannot be read.
    """
    if source is None:
        logger.debug("No config source provided; using defaults")
        return DependableConfig()

    if isinstance(source, dict):
        data = source
    elif isinstance(source, (str, Path)):
        data = _read(source)
    else:
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    section = data.get(_SECTION)
    return DependableConfig.from_dict(section if isinstance(section, dict) else data)


__all__ = ["ConfigSource", "load_config"]
