"""Module cache scanning for gomodclean."""

import os
from pathlib import Path
from typing import Iterator

from pydantic import ValidationError

from gomodclean.codec import decode_coordinate, encode_coordinate, escape_path, unescape_path
from gomodclean.errors import InvalidCoordinateError, ScanError
from gomodclean.log import logger
from gomodclean.models import Coordinate

# Top-level bookkeeping directories (cache/download, cache/vcs, ...)
RESERVED_PREFIX = "cache"
CHECKSUM_DB_DIR = "sumdb"
VERSION_DIR = "@v"
VERSION_LIST_FILE = "list"
# Index files living next to the version artifacts, not artifacts themselves
INDEX_FILES = frozenset({"list", "list.lock"})


def download_root(cache: Path) -> Path:
    return cache / "cache" / "download"


def extracted_mod_path(cache: Path, coord: Coordinate) -> Path:
    """Absolute path of an extracted module directory."""
    return cache.joinpath(*encode_coordinate(coord).split("/"))


def version_dir(cache: Path, module_path: str) -> Path:
    """Directory holding downloaded artifacts for a module path."""
    return download_root(cache).joinpath(*escape_path(module_path).split("/"), VERSION_DIR)


def version_list_path(cache: Path, module_path: str) -> Path:
    """Path of the @v/list version index for a module path."""
    return version_dir(cache, module_path) / VERSION_LIST_FILE


def _scandir_sorted(path: Path) -> list[os.DirEntry]:
    try:
        with os.scandir(path) as entries:
            return sorted(entries, key=lambda e: e.name)
    except OSError as e:
        raise ScanError(f"failed to read directory {path}: {e}") from e


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError as e:
        raise ScanError(f"failed to stat {entry.path}: {e}") from e


def scan_extracted(cache: Path) -> list[Coordinate]:
    """
    Find all extracted modules under the cache root.

    A directory whose name contains '@' is one module; its subtree is not
    descended since extracted modules never nest.

    Args:
        cache: Module cache root

    Returns:
        Decoded coordinates in walk order

    Raises:
        ScanError: on any traversal failure or undecodable entry
    """
    mods: list[Coordinate] = []

    def _walk(path: Path) -> None:
        for entry in _scandir_sorted(path):
            if not _is_dir(entry):
                continue

            if path == cache and entry.name.startswith(RESERVED_PREFIX):
                logger.debug("Skipping reserved directory %s", entry.path)
                continue

            if "@" in entry.name:
                rel = Path(entry.path).relative_to(cache).as_posix()
                try:
                    mods.append(decode_coordinate(rel))
                except InvalidCoordinateError as e:
                    raise ScanError(f"unexpected module directory {entry.path}: {e}") from e
                continue

            _walk(Path(entry.path))

    _walk(cache)
    return mods


def _iter_files(root: Path) -> Iterator[Path]:
    for entry in _scandir_sorted(root):
        if _is_dir(entry):
            if entry.name == CHECKSUM_DB_DIR:
                logger.debug("Skipping checksum database %s", entry.path)
                continue
            yield from _iter_files(Path(entry.path))
        else:
            yield Path(entry.path)


def scan_downloaded(cache: Path) -> list[Coordinate]:
    """
    Find all downloaded modules under cache/download.

    Every artifact file (``v1.2.3.info``, ``.mod``, ``.zip``, ``.ziphash``)
    maps to the module path above its @v directory plus the file stem; the
    several files of one version collapse into a single coordinate.

    Raises:
        ScanError: on any traversal failure or undecodable artifact name
    """
    root = download_root(cache)
    if not root.exists():
        return []

    # dict keeps first-seen order while deduplicating
    store: dict[Coordinate, None] = {}

    for file in _iter_files(root):
        if file.parent.name != VERSION_DIR or file.name in INDEX_FILES:
            continue
        if not file.suffix:
            continue

        modpath = file.parent.parent.relative_to(root).as_posix()
        version = file.name[: -len(file.suffix)]
        try:
            coord = Coordinate(path=unescape_path(modpath), version=unescape_path(version))
        except ValidationError as e:
            raise ScanError(f"unexpected download file {file}: {e}") from e
        store[coord] = None

    return list(store)


def downloaded_mod_files(cache: Path, coord: Coordinate) -> list[Path]:
    """
    List the artifact files belonging to one downloaded module version.

    Raises:
        ScanError: if the module's @v directory cannot be read
    """
    stem = escape_path(coord.version)
    files = []

    for entry in _scandir_sorted(version_dir(cache, coord.path)):
        if _is_dir(entry) or entry.name in INDEX_FILES:
            continue
        name, dot, _ = entry.name.rpartition(".")
        if dot and name == stem:
            files.append(Path(entry.path))

    return files


def get_directory_size(path: Path) -> int:
    """
    Calculate total size of a directory in bytes.

    Symlinks are counted by their own size, never followed.

    Raises:
        ScanError: if any entry cannot be read
    """
    total_size = 0

    def _scan(p: Path):
        nonlocal total_size
        for entry in _scandir_sorted(p):
            try:
                if entry.is_dir(follow_symlinks=False):
                    _scan(Path(entry.path))
                else:
                    total_size += entry.stat(follow_symlinks=False).st_size
            except OSError as e:
                raise ScanError(f"failed to stat {entry.path}: {e}") from e

    _scan(path)
    return total_size


def get_files_size(files: list[Path]) -> int:
    """Sum the sizes of the given files."""
    total = 0
    for file in files:
        try:
            total += file.stat().st_size
        except OSError as e:
            raise ScanError(f"failed to stat {file}: {e}") from e
    return total
