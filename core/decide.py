"""Update decision rules."""

import logging
import re

import semver

from .errors import InvalidVersionError
from .models import CheckOptions, DependencySpec, UpdateDecision

logger = logging.getLogger(__name__)

LATEST_TAG = "latest"

# npm's loose semver parse accepts these ahead of the version number
_LOOSE_PREFIX = re.compile(r"^[\s=v]+")


def is_selected(specifier: str, options: CheckOptions) -> bool:
    """Check if a dependency should be looked up at all."""
    if options.latest or options.show_all:
        return True
    return specifier != LATEST_TAG


def normalize_version(specifier: str, latest_version: str) -> str:
    """Turn a declared specifier into a comparable version string.

    Args:
        specifier: Version specifier as written in package.json
        latest_version: Latest version reported by the registry

    Returns:
        The specifier itself when it starts with a digit, the latest version
        for the "latest" tag, otherwise the specifier minus its first
        character (the range operator)
    """
    if specifier[:1].isdigit():
        return specifier
    if specifier == LATEST_TAG:
        return latest_version
    return specifier[1:]


def parse_version(version: str) -> semver.Version:
    """Parse a semver string, tolerating a leading "v" or "="."""
    try:
        return semver.Version.parse(_LOOSE_PREFIX.sub("", version.strip()))
    except ValueError as e:
        raise InvalidVersionError(f"Invalid version: {version!r}") from e


def is_newer(latest_version: str, current_version: str) -> bool:
    """Check if latest_version has higher precedence than current_version.

    Build metadata does not take part in the comparison.
    """
    return parse_version(latest_version) > parse_version(current_version)


def is_eligible(current_version: str, latest_version: str, options: CheckOptions) -> bool:
    """Check if a normalized dependency should be reported."""
    if options.show_all:
        return True
    if options.latest and current_version == latest_version:
        return True
    return is_newer(latest_version, current_version)


def decide(
    spec: DependencySpec, latest_version: str, options: CheckOptions
) -> UpdateDecision | None:
    """Build the decision for one dependency, or None if it is not eligible."""
    current_version = normalize_version(spec.specifier, latest_version)
    try:
        eligible = is_eligible(current_version, latest_version, options)
    except InvalidVersionError as e:
        raise InvalidVersionError(f"{spec.name}: {e}") from e

    if not eligible:
        logger.debug("%s %s is up to date (%s)", spec.name, spec.specifier, latest_version)
        return None

    logger.debug("%s: %s -> %s", spec.name, current_version, latest_version)
    return UpdateDecision(
        name=spec.name,
        current_version=current_version,
        latest_version=latest_version,
        group=spec.group,
    )
