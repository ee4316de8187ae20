"""Conversion between module coordinates and module cache paths.

The Go module cache must work on case-insensitive filesystems, so every
uppercase letter in a module path or version is stored as ``!`` followed by
its lowercase form (``github.com/BurntSushi/toml`` is stored as
``github.com/!burnt!sushi/toml``).
"""

from gomodclean.errors import InvalidCoordinateError
from gomodclean.models import Coordinate

ESCAPE_MARKER = "!"
SEPARATOR = "@"


def escape_path(value: str) -> str:
    """Escape uppercase ASCII letters as ``!`` + lowercase."""
    if not any("A" <= ch <= "Z" for ch in value):
        return value

    return "".join(
        ESCAPE_MARKER + ch.lower() if "A" <= ch <= "Z" else ch for ch in value
    )


def unescape_path(value: str) -> str:
    """
    Reverse escape_path.

    A ``!`` that is not followed by a lowercase letter is passed through
    unchanged; well-formed caches never contain one, and callers must not
    rely on this function for validation.
    """
    if ESCAPE_MARKER not in value:
        return value

    chars = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == ESCAPE_MARKER and i + 1 < len(value) and "a" <= value[i + 1] <= "z":
            chars.append(value[i + 1].upper())
            i += 2
            continue
        chars.append(ch)
        i += 1

    return "".join(chars)


def parse_coordinate(value: str) -> Coordinate:
    """
    Split ``path@version`` into a Coordinate.

    Raises:
        InvalidCoordinateError: if the value does not have exactly one
            separator with non-empty text on both sides
    """
    parts = value.split(SEPARATOR)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise InvalidCoordinateError(f"invalid module coordinate: {value!r}")

    return Coordinate(path=parts[0], version=parts[1])


def encode_coordinate(coord: Coordinate) -> str:
    """Relative cache path of an extracted module, e.g. ``github.com/!foo/bar@v1.0.0``."""
    return f"{escape_path(coord.path)}{SEPARATOR}{escape_path(coord.version)}"


def decode_coordinate(relpath: str) -> Coordinate:
    """Inverse of encode_coordinate. Accepts OS or forward-slash separators."""
    return parse_coordinate(unescape_path(relpath.replace("\\", "/")))
