"""Shared fixtures: synthetic Go module caches."""

from pathlib import Path

import pytest

from gomodclean.codec import escape_path

ARTIFACT_KINDS = ("info", "mod", "zip", "ziphash")


class FakeCache:
    """Builds a module cache layout under a temporary directory."""

    def __init__(self, root: Path):
        self.root = root
        self.download = root / "cache" / "download"
        self.root.mkdir(parents=True, exist_ok=True)

    def extracted(self, path: str, version: str, modfile: str | None = None, size: int = 10) -> Path:
        mod_dir = self.root / f"{escape_path(path)}@{escape_path(version)}"
        mod_dir.mkdir(parents=True)
        (mod_dir / "main.go").write_bytes(b"x" * size)
        if modfile is not None:
            (mod_dir / "go.mod").write_text(modfile)
        return mod_dir

    def downloaded(self, path: str, version: str, size: int = 10) -> list[Path]:
        vdir = self.download / escape_path(path) / "@v"
        vdir.mkdir(parents=True, exist_ok=True)
        files = []
        for kind in ARTIFACT_KINDS:
            file = vdir / f"{escape_path(version)}.{kind}"
            file.write_bytes(b"y" * size)
            files.append(file)
        return files

    def version_list(self, path: str, versions: list[str]) -> Path:
        vdir = self.download / escape_path(path) / "@v"
        vdir.mkdir(parents=True, exist_ok=True)
        list_file = vdir / "list"
        list_file.write_text("".join(f"{v}\n" for v in versions))
        return list_file

    def list_path(self, path: str) -> Path:
        return self.download / escape_path(path) / "@v" / "list"


@pytest.fixture
def fake_cache(tmp_path) -> FakeCache:
    return FakeCache(tmp_path / "pkg" / "mod")


@pytest.fixture
def project(tmp_path):
    """Return a function writing a project go.mod and returning its path."""

    def _write(content: str, name: str = "app") -> Path:
        project_dir = tmp_path / "src" / name
        project_dir.mkdir(parents=True, exist_ok=True)
        modfile = project_dir / "go.mod"
        modfile.write_text(content)
        return modfile

    return _write
