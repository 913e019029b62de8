"""Node.js package.json reading and writing."""

import json
import logging
from pathlib import Path

from .errors import ManifestNotFoundError, ManifestParseError
from .models import DEPENDENCY_GROUPS, Manifest, UpdateDecision

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


def parse_package_json(content: str, path: Path | str = MANIFEST_NAME) -> Manifest:
    """Parse package.json content into Manifest.

    Args:
        content: The package.json file content
        path: Where the content was read from

    Returns:
        Parsed Manifest object

    Raises:
        ManifestParseError: If the content is not a JSON object or a
            dependency section is not a name -> specifier mapping
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestParseError(f"Expected a JSON object at the top of {path}")

    for group in DEPENDENCY_GROUPS:
        section = data.get(group)
        if section is None:
            continue
        if not isinstance(section, dict):
            raise ManifestParseError(f'"{group}" in {path} must be an object')
        for name, specifier in section.items():
            if not isinstance(specifier, str):
                raise ManifestParseError(
                    f'Version of "{name}" in "{group}" must be a string'
                )

    return Manifest(path=Path(path), data=data)


def read_manifest(directory: Path | str, filename: str = MANIFEST_NAME) -> Manifest:
    """Read the manifest from a directory.

    Args:
        directory: Directory holding the manifest
        filename: Manifest file name

    Returns:
        Parsed Manifest object
    """
    path = Path(directory) / filename
    if not path.is_file():
        raise ManifestNotFoundError(f"File {path} not found")

    logger.debug("Reading manifest %s", path)
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ManifestParseError(f"{path} is not valid UTF-8: {e}") from e
    return parse_package_json(content, path)


def apply_updates(manifest: Manifest, decisions: list[UpdateDecision]) -> dict:
    """Merge decisions into a copy of the manifest data.

    Every decision pins its entry to a caret range of the latest version.
    Key order and all other fields are kept as they were.
    """
    data = dict(manifest.data)
    for group in DEPENDENCY_GROUPS:
        updates = {d.name: f"^{d.latest_version}" for d in decisions if d.group == group}
        if not updates:
            continue
        section = dict(manifest.group(group))
        section.update(updates)
        data[group] = section
    return data


def dump_manifest(data: dict) -> str:
    """Serialize manifest data the way npm formats package.json."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_manifest(manifest: Manifest, data: dict) -> None:
    """Overwrite the manifest file with new data."""
    logger.debug("Writing manifest %s", manifest.path)
    manifest.path.write_text(dump_manifest(data), encoding="utf-8")
    manifest.data = data
