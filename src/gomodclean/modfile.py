"""Lax go.mod parsing.

Only the directives that decide which modules a project uses are
interpreted: ``module``, ``require`` and ``replace``. Everything else
(``go``, ``toolchain``, ``exclude``, ``retract``, ``tool`` ...) is skipped,
including block forms, the same way ``modfile.ParseLax`` ignores them.
"""

from pathlib import Path

from pydantic import ValidationError

from gomodclean.errors import ModfileError
from gomodclean.models import Coordinate, Modfile, ModuleRef, ReplaceDirective

MODFILE_NAME = "go.mod"
ARROW = "=>"


def _tokenize(line: str, filename: str, lineno: int) -> list[str]:
    """Split a line into tokens, honouring quotes and stripping // comments."""
    tokens: list[str] = []
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]

        if ch.isspace():
            i += 1
            continue

        if line.startswith("//", i):
            break

        if ch in "()":
            tokens.append(ch)
            i += 1
            continue

        if ch == '"':
            j = i + 1
            buf = []
            while j < n and line[j] != '"':
                if line[j] == "\\" and j + 1 < n:
                    j += 1
                buf.append(line[j])
                j += 1
            if j >= n:
                raise ModfileError(f"{filename}:{lineno}: unterminated quoted string")
            tokens.append("".join(buf))
            i = j + 1
            continue

        if ch == "`":
            end = line.find("`", i + 1)
            if end < 0:
                raise ModfileError(f"{filename}:{lineno}: unterminated raw string")
            tokens.append(line[i + 1 : end])
            i = end + 1
            continue

        j = i
        while j < n and not line[j].isspace() and line[j] not in '()"`':
            if line.startswith("//", j):
                break
            j += 1
        tokens.append(line[i:j])
        i = j

    return tokens


def _check_version(version: str, filename: str, lineno: int) -> str:
    if not version.startswith("v"):
        raise ModfileError(f"{filename}:{lineno}: invalid version {version!r}")
    return version


def _parse_require(args: list[str], filename: str, lineno: int) -> Coordinate:
    if len(args) != 2:
        raise ModfileError(f"{filename}:{lineno}: usage: require module/path v1.2.3")

    path, version = args
    try:
        return Coordinate(path=path, version=_check_version(version, filename, lineno))
    except ValidationError as e:
        raise ModfileError(f"{filename}:{lineno}: invalid module {path}@{version}") from e


def _parse_replace(args: list[str], filename: str, lineno: int) -> ReplaceDirective:
    if ARROW not in args:
        raise ModfileError(
            f"{filename}:{lineno}: usage: replace module/path [v1.2.3] => other/module v1.4 "
            "or replace module/path [v1.2.3] => ../local/directory"
        )

    arrow = args.index(ARROW)
    left, right = args[:arrow], args[arrow + 1 :]

    if len(left) not in (1, 2) or len(right) not in (1, 2):
        raise ModfileError(f"{filename}:{lineno}: invalid replace directive")

    old = ModuleRef(
        path=left[0],
        version=_check_version(left[1], filename, lineno) if len(left) == 2 else None,
    )
    new = ModuleRef(
        path=right[0],
        version=_check_version(right[1], filename, lineno) if len(right) == 2 else None,
    )

    for ref in (old, new):
        try:
            ref.coordinate()
        except ValidationError as e:
            raise ModfileError(
                f"{filename}:{lineno}: invalid module {ref.path}@{ref.version}"
            ) from e

    return ReplaceDirective(old=old, new=new)


def parse_modfile_bytes(filename: str, data: bytes) -> Modfile:
    """
    Parse go.mod content.

    Args:
        filename: Name used in error messages
        data: Raw file content

    Returns:
        Modfile with require and replace directives in file order

    Raises:
        ModfileError: if the content is not UTF-8 or a require/replace
            directive is malformed
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ModfileError(f"{filename}: not valid UTF-8: {e}") from e

    result = Modfile()
    block: str | None = None

    for lineno, raw in enumerate(text.splitlines(), start=1):
        tokens = _tokenize(raw, filename, lineno)
        if not tokens:
            continue

        if block is not None:
            if tokens == [")"]:
                block = None
                continue
            verb, args = block, tokens
        else:
            verb, args = tokens[0], tokens[1:]
            if args and args[0] == "(":
                if args == ["(", ")"]:
                    continue
                if args != ["("]:
                    raise ModfileError(f"{filename}:{lineno}: unexpected tokens after '('")
                block = verb
                continue

        if verb == "module":
            if len(args) != 1:
                raise ModfileError(f"{filename}:{lineno}: usage: module module/path")
            result.module = args[0]
        elif verb == "require":
            result.require.append(_parse_require(args, filename, lineno))
        elif verb == "replace":
            result.replace.append(_parse_replace(args, filename, lineno))

    if block is not None:
        raise ModfileError(f"{filename}: unterminated {block} block")

    return result


def parse_modfile(path: Path) -> Modfile:
    """Read and parse a go.mod file from disk."""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ModfileError(f"failed to read {path}: {e}") from e

    return parse_modfile_bytes(str(path), data)


def coordinates_of(modfile: Modfile) -> list[Coordinate]:
    """
    All coordinates a go.mod references.

    A replace contributes both sides since either may be what is actually
    extracted in the cache. Sides without a version are skipped.
    """
    coords = list(modfile.require)

    for directive in modfile.replace:
        for ref in (directive.old, directive.new):
            coord = ref.coordinate()
            if coord is not None:
                coords.append(coord)

    return coords
