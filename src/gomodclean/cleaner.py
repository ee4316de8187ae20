"""Removal of unused modules with version index maintenance."""

import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import Callable

from gomodclean.errors import RemovalError, ScanError
from gomodclean.log import logger
from gomodclean.models import CleanupResult, Coordinate
from gomodclean.scanner import downloaded_mod_files, extracted_mod_path, version_list_path


def list_unused_paths(
    cache: Path,
    extracted: list[Coordinate],
    downloaded: list[Coordinate],
) -> list[Path]:
    """
    Every path remove_unused would delete, without touching anything.

    Raises:
        ScanError: if a downloaded module's files cannot be listed
    """
    paths = [extracted_mod_path(cache, coord) for coord in extracted]

    for coord in downloaded:
        paths.extend(downloaded_mod_files(cache, coord))

    return paths


def _make_writable(path: Path) -> None:
    """Add owner write permission throughout a tree; the go tool extracts modules read-only."""
    for root, dirs, _ in os.walk(path):
        for name in [root, *(os.path.join(root, d) for d in dirs)]:
            mode = os.stat(name, follow_symlinks=False).st_mode
            if not mode & stat.S_IWUSR:
                os.chmod(name, mode | stat.S_IWUSR)


def remove_extracted(path: Path) -> None:
    """Delete an extracted module directory. An absent directory is fine."""
    if not path.exists():
        logger.debug("Already removed %s", path)
        return

    try:
        _make_writable(path)
        shutil.rmtree(path)
    except OSError as e:
        raise RemovalError(f"failed to remove {path}: {e}") from e


def remove_file(path: Path) -> None:
    """Delete one downloaded artifact. The file is expected to exist."""
    try:
        path.unlink()
    except FileNotFoundError as e:
        raise RemovalError(f"expected file is missing: {path}") from e
    except OSError as e:
        raise RemovalError(f"failed to remove {path}: {e}") from e


def remove_unused(
    cache: Path,
    extracted: list[Coordinate],
    downloaded: list[Coordinate],
    progress_callback: Callable[[str], None] | None = None,
) -> CleanupResult:
    """
    Delete unused modules, then drop their versions from the @v/list indexes.

    Deletions run sequentially and stop at the first failure, so a version
    index is only rewritten once every artifact it should forget is gone.

    Args:
        cache: Module cache root
        extracted: Unused extracted modules
        downloaded: Unused downloaded modules
        progress_callback: Optional callback(path) before each deletion

    Returns:
        CleanupResult with removed paths and index rewrite outcomes

    Raises:
        RemovalError: if any deletion fails
    """
    result = CleanupResult()

    for coord in extracted:
        path = extracted_mod_path(cache, coord)
        if progress_callback:
            progress_callback(str(path))
        logger.debug("Removing %s", path)
        remove_extracted(path)
        result.removed_paths.append(str(path))

    for coord in downloaded:
        try:
            files = downloaded_mod_files(cache, coord)
        except ScanError as e:
            raise RemovalError(f"failed to list files of {coord}: {e}") from e

        for file in files:
            if progress_callback:
                progress_callback(str(file))
            logger.debug("Removing %s", file)
            remove_file(file)
            result.removed_paths.append(str(file))

    rewritten, errors = rewrite_version_lists(cache, downloaded)
    result.rewritten_indexes = rewritten
    result.index_errors = errors
    return result


def read_version_list(path: Path) -> list[str]:
    """Versions in an @v/list file, in file order."""
    return path.read_text(encoding="utf-8").splitlines()


def rewrite_version_list(cache: Path, module_path: str, removed_versions: set[str]) -> bool:
    """
    Drop removed versions from one module's @v/list, keeping the rest in order.

    The new content is written to a temporary file beside the index and
    renamed over it.

    Returns:
        True if the file was rewritten, False if the module has no index
    """
    path = version_list_path(cache, module_path)
    if not path.is_file():
        return False

    versions = read_version_list(path)
    remaining = [v for v in versions if v not in removed_versions]

    fd, tmp_name = tempfile.mkstemp(prefix=".list-", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            for version in remaining:
                f.write(f"{version}\n")
        # mkstemp creates 0600
        shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    return True


def rewrite_version_lists(
    cache: Path,
    removed: list[Coordinate],
) -> tuple[list[str], dict[str, str]]:
    """
    Rewrite the @v/list index of every module path that lost a version.

    A failure for one module path is logged and does not stop the others;
    the deletions have already happened and must still be reported.

    Returns:
        Tuple of (rewritten module paths, module path -> error message)
    """
    mod_to_versions: dict[str, set[str]] = {}
    for coord in removed:
        mod_to_versions.setdefault(coord.path, set()).add(coord.version)

    rewritten: list[str] = []
    errors: dict[str, str] = {}

    for module_path, versions in mod_to_versions.items():
        try:
            if rewrite_version_list(cache, module_path, versions):
                rewritten.append(module_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("failed to rewrite version list for %s: %s", module_path, e)
            errors[module_path] = str(e)

    return rewritten, errors
