"""Resolution of the modules that are still in use."""

from collections import deque
from pathlib import Path

from gomodclean.errors import ModfileError
from gomodclean.log import logger
from gomodclean.modfile import MODFILE_NAME, coordinates_of, parse_modfile
from gomodclean.models import Coordinate
from gomodclean.scanner import extracted_mod_path


def find_modfiles(paths: list[Path]) -> list[Path]:
    """
    Expand the configured roots into a list of go.mod files.

    Args:
        paths: go.mod files, or directories searched recursively for them

    Returns:
        go.mod paths, directories expanded in sorted order

    Raises:
        ModfileError: if a path is neither a go.mod file nor a directory
    """
    modfiles: list[Path] = []

    for path in paths:
        if path.name == MODFILE_NAME and path.is_file():
            modfiles.append(path)
        elif path.is_dir():
            try:
                found = sorted(p for p in path.rglob(MODFILE_NAME) if p.is_file())
            except OSError as e:
                raise ModfileError(f"failed to search {path} for go.mod files: {e}") from e
            logger.debug("Found %d go.mod file(s) under %s", len(found), path)
            modfiles.extend(found)
        else:
            raise ModfileError(f"{path} is neither a go.mod file nor a directory")

    return modfiles


def resolve_in_use(
    cache: Path,
    modfiles: list[Path],
    transitive: bool = True,
) -> set[Coordinate]:
    """
    Collect every module coordinate referenced from the given go.mod files.

    In transitive mode each collected coordinate's own go.mod is looked up
    inside the extracted cache and followed in turn. A go.mod is parsed at
    most once, which also terminates dependency cycles. Modules that are
    not extracted simply are not expanded further.

    Raises:
        ModfileError: if any go.mod cannot be read or parsed. No partial
            result is returned since it could mark used modules as unused.
    """
    in_use: set[Coordinate] = set()
    visited: set[Path] = set()
    pending: deque[Path] = deque()

    for modfile in modfiles:
        resolved = modfile.resolve()
        if resolved not in visited:
            visited.add(resolved)
            pending.append(modfile)

    while pending:
        modfile = pending.popleft()
        logger.debug("Parsing %s", modfile)

        for coord in coordinates_of(parse_modfile(modfile)):
            if coord in in_use:
                continue
            in_use.add(coord)

            if not transitive:
                continue

            dep_modfile = extracted_mod_path(cache, coord) / MODFILE_NAME
            key = dep_modfile.resolve()
            if key in visited:
                continue
            if not dep_modfile.is_file():
                logger.debug("No extracted go.mod for %s", coord)
                continue

            visited.add(key)
            pending.append(dep_modfile)

    return in_use
