"""Concurrent size calculation for unused modules."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable

from gomodclean.errors import SizeCalculationError
from gomodclean.log import logger
from gomodclean.models import Coordinate
from gomodclean.scanner import (
    downloaded_mod_files,
    extracted_mod_path,
    get_directory_size,
    get_files_size,
)


def extracted_mod_size(cache: Path, coord: Coordinate) -> int:
    return get_directory_size(extracted_mod_path(cache, coord))


def downloaded_mod_size(cache: Path, coord: Coordinate) -> int:
    return get_files_size(downloaded_mod_files(cache, coord))


def calculate_size(
    cache: Path,
    extracted: list[Coordinate],
    downloaded: list[Coordinate],
    max_workers: int = 8,
    progress_callback: Callable[[int, int], None] | None = None,
) -> int:
    """
    Total bytes occupied by the given extracted and downloaded modules.

    One task per module runs on a bounded thread pool. Every task runs to
    completion; if any of them failed, the total is discarded.

    Args:
        cache: Module cache root
        extracted: Extracted modules to size
        downloaded: Downloaded modules to size
        max_workers: Number of parallel workers
        progress_callback: Optional callback(completed, total)

    Returns:
        Total size in bytes

    Raises:
        SizeCalculationError: carrying every task failure
    """
    tasks = [(extracted_mod_size, coord) for coord in extracted]
    tasks += [(downloaded_mod_size, coord) for coord in downloaded]
    total_tasks = len(tasks)

    total = 0
    errors: list[Exception] = []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(func, cache, coord) for func, coord in tasks]

        for i, future in enumerate(as_completed(futures)):
            if progress_callback:
                progress_callback(i + 1, total_tasks)

            try:
                total += future.result()
            except Exception as e:
                errors.append(e)

    if errors:
        logger.debug("Size calculation failed for %d of %d modules", len(errors), total_tasks)
        raise SizeCalculationError(errors)

    return total
