"""Check a manifest for updates and optionally apply them."""

import logging
from pathlib import Path

from .models import CheckOptions, UpdateReport
from .parse_node import MANIFEST_NAME, apply_updates, read_manifest, write_manifest
from .resolve_node import NodeResolver

logger = logging.getLogger(__name__)


async def check_for_updates(
    directory: Path | str,
    options: CheckOptions,
    resolver: NodeResolver | None = None,
    manifest_name: str = MANIFEST_NAME,
) -> UpdateReport:
    """Check the manifest in ``directory`` and rewrite it in upgrade mode.

    Args:
        directory: Directory holding the manifest
        options: Mode flags for this run
        resolver: Registry resolver, a default one is built if omitted
        manifest_name: Manifest file name

    Returns:
        Report with the emitted decisions and whether the file was written
    """
    options.validate()

    manifest = read_manifest(directory, manifest_name)
    resolver = resolver or NodeResolver()
    decisions = await resolver.check(manifest, options)

    report = UpdateReport(decisions=decisions)
    if report.up_to_date:
        logger.debug("No eligible updates in %s", manifest.path)
        return report

    if options.upgrade:
        write_manifest(manifest, apply_updates(manifest, decisions))
        report.written = True

    return report
