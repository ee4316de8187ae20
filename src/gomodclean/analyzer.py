"""Comparison of the module cache against the modules in use."""

from typing import Callable

from gomodclean.log import logger
from gomodclean.models import Analysis, CleanerConfig, Coordinate
from gomodclean.resolver import find_modfiles, resolve_in_use
from gomodclean.scanner import scan_downloaded, scan_extracted
from gomodclean.sizer import calculate_size


def unused_mods(mods: list[Coordinate], in_use: set[Coordinate]) -> list[Coordinate]:
    """Modules not in the in-use set, in their original order."""
    return [mod for mod in mods if mod not in in_use]


def analyze_cache(
    config: CleanerConfig,
    progress_callback: Callable[[str], None] | None = None,
) -> Analysis:
    """
    Find unused modules in the cache and the space they occupy.

    Args:
        config: Cleaner configuration
        progress_callback: Optional callback(stage_description)

    Returns:
        Analysis with the unused extracted and downloaded modules

    Raises:
        CleanerError: if scanning, go.mod resolution or sizing fails
    """

    def _stage(description: str) -> None:
        logger.debug(description)
        if progress_callback:
            progress_callback(description)

    cache = config.cache_path

    _stage("Scanning extracted modules...")
    extracted = scan_extracted(cache)

    _stage("Scanning downloaded modules...")
    downloaded = scan_downloaded(cache)

    _stage("Resolving modules in use...")
    modfiles = find_modfiles(config.modfile_paths)
    in_use = resolve_in_use(cache, modfiles, transitive=config.transitive)
    logger.debug(
        "%d extracted, %d downloaded, %d in use (%s)",
        len(extracted),
        len(downloaded),
        len(in_use),
        "transitive" if config.transitive else "direct only",
    )

    unused_extracted = unused_mods(extracted, in_use)
    unused_downloaded = unused_mods(downloaded, in_use)

    _stage("Calculating reclaimable space...")
    total_bytes = calculate_size(
        cache,
        unused_extracted,
        unused_downloaded,
        max_workers=config.max_workers,
    )

    return Analysis(
        unused_extracted=unused_extracted,
        unused_downloaded=unused_downloaded,
        extracted_count=len(extracted),
        downloaded_count=len(downloaded),
        in_use_count=len(in_use),
        total_bytes=total_bytes,
    )
