"""NPM package.json reader.

Loads the project manifest and merges its dependency sections into a
single name -> version range mapping.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dependable.parsers.base import (
    ManifestError,
    ManifestNotFoundError,
    ManifestParseError,
)

logger = logging.getLogger("dependable.parsers.npm.manifest")

DEFAULT_MANIFEST_NAME = "package.json"

# Merge order matters: later sections overwrite earlier ones on collision
_PROD_FIELD = "dependencies"
_DEV_FIELD = "devDependencies"


def load_manifest(
    project_path: Union[str, Path],
    manifest_name: str = DEFAULT_MANIFEST_NAME,
) -> Dict[str, Any]:
    """Read and decode the manifest file.

    Args:
        project_path: Project root directory.
        manifest_name: Manifest file name relative to the project root.

    Returns:
        Dict[str, Any]: Decoded manifest object.

    Raises:
        ManifestNotFoundError: If the manifest file does not exist.
        ManifestParseError: If the file cannot be read or is not a JSON object.
    """
    manifest_path = Path(project_path) / manifest_name
    if not manifest_path.exists():
        raise ManifestNotFoundError(
            f"{manifest_name} not found at {manifest_path}", manifest_path
        )

    logger.debug("Reading manifest %s", manifest_path)
    try:
        content = manifest_path.read_text(encoding="utf-8")
        manifest = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestParseError(
            f"Invalid JSON in {manifest_path}: {e}", manifest_path
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestParseError(
            f"Cannot read {manifest_path}: {e}", manifest_path
        ) from e

    if not isinstance(manifest, dict):
        raise ManifestParseError(
            f"Expected a JSON object in {manifest_path}, got {type(manifest).__name__}",
            manifest_path,
        )
    return manifest


def _section(manifest: Dict[str, Any], dep_field: str) -> Dict[str, str]:
    deps = manifest.get(dep_field) or {}
    if not isinstance(deps, dict):
        logger.warning(
            "Ignoring %s: expected an object, got %s", dep_field, type(deps).__name__
        )
        return {}
    return {str(name): str(spec) for name, spec in deps.items()}


def merge_dependencies(
    manifest: Dict[str, Any], include_dev: bool = True
) -> Dict[str, str]:
    """Merge ``dependencies`` and ``devDependencies`` into one mapping.

    Dev entries overwrite prod entries with the same name. Prod/dev origin
    is not kept in the result.

    Args:
        manifest: Decoded manifest object.
        include_dev: Whether to merge ``devDependencies`` at all.

    Returns:
        Dict[str, str]: Package name -> declared version range.
    """
    merged = _section(manifest, _PROD_FIELD)
    if include_dev:
        merged.update(_section(manifest, _DEV_FIELD))
    return merged


def get_dependencies(
    project_path: Union[str, Path],
    manifest_name: str = DEFAULT_MANIFEST_NAME,
    include_dev: bool = True,
) -> Optional[Dict[str, str]]:
    """Return the merged dependency map, or None if the manifest is unusable.

    Failures are logged here; callers only need to check for None.
    """
    try:
        manifest = load_manifest(project_path, manifest_name)
    except ManifestNotFoundError as e:
        logger.error("Error: %s", e)
        return None
    except ManifestError as e:
        logger.error("Error parsing %s: %s", manifest_name, e)
        return None

    dependencies = merge_dependencies(manifest, include_dev=include_dev)
    logger.info(
        "Loaded %d dependencies from %s (name=%s, version=%s)",
        len(dependencies),
        manifest_name,
        manifest.get("name", Path(project_path).name),
        manifest.get("version", "0.0.0"),
    )
    return dependencies


__all__ = [
    "DEFAULT_MANIFEST_NAME",
    "load_manifest",
    "merge_dependencies",
    "get_dependencies",
]
