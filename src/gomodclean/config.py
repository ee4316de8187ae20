"""Module cache location discovery."""

import os
from pathlib import Path


def expand_path(path: str) -> Path:
    """Expand ~ and environment variables in path."""
    return Path(os.path.expanduser(os.path.expandvars(path)))


def default_cache_path(environ: dict[str, str] | None = None) -> Path:
    """
    Locate the module cache the same way the go command does.

    Order: $GOMODCACHE, then the first $GOPATH entry + pkg/mod, then ~/go/pkg/mod.
    """
    env = os.environ if environ is None else environ

    gomodcache = env.get("GOMODCACHE")
    if gomodcache:
        return expand_path(gomodcache)

    gopath = env.get("GOPATH")
    if gopath:
        first = gopath.split(os.pathsep)[0]
        if first:
            return expand_path(first) / "pkg" / "mod"

    return Path.home() / "go" / "pkg" / "mod"
