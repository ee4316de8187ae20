"""Tests for go.mod parsing."""

import pytest

from gomodclean.errors import ModfileError
from gomodclean.models import Coordinate
from gomodclean.modfile import coordinates_of, parse_modfile, parse_modfile_bytes

SAMPLE = b"""module example.com/app

go 1.21

toolchain go1.21.5

require (
\tgithub.com/BurntSushi/toml v1.3.2
\tgolang.org/x/mod v0.14.0 // indirect
)

require github.com/spf13/cobra v1.8.0

replace github.com/old/dep v1.0.0 => github.com/new/dep v1.1.0

replace (
\texample.com/local => ../local
\t"example.com/quoted" v0.1.0 => example.com/fork v0.2.0
)

exclude (
\tgolang.org/x/net v0.1.0
)

retract [v1.0.0, v1.0.5] // broken
"""


class TestParseModfileBytes:
    def test_module(self):
        mf = parse_modfile_bytes("go.mod", SAMPLE)
        assert mf.module == "example.com/app"

    def test_require_block_and_single(self):
        mf = parse_modfile_bytes("go.mod", SAMPLE)
        assert [str(c) for c in mf.require] == [
            "github.com/BurntSushi/toml@v1.3.2",
            "golang.org/x/mod@v0.14.0",
            "github.com/spf13/cobra@v1.8.0",
        ]

    def test_replace_directives(self):
        mf = parse_modfile_bytes("go.mod", SAMPLE)
        assert len(mf.replace) == 3

        first = mf.replace[0]
        assert first.old.path == "github.com/old/dep"
        assert first.old.version == "v1.0.0"
        assert first.new.version == "v1.1.0"

        local = mf.replace[1]
        assert local.old.version is None
        assert local.new.path == "../local"
        assert local.new.version is None

        quoted = mf.replace[2]
        assert quoted.old.path == "example.com/quoted"

    def test_ignores_other_directives(self):
        mf = parse_modfile_bytes("go.mod", SAMPLE)
        paths = {c.path for c in mf.require}
        assert "golang.org/x/net" not in paths

    def test_empty_file(self):
        mf = parse_modfile_bytes("go.mod", b"")
        assert mf.require == []
        assert mf.replace == []

    def test_malformed_require(self):
        with pytest.raises(ModfileError, match="go.mod:2"):
            parse_modfile_bytes("go.mod", b"module m\nrequire github.com/a/b\n")

    def test_invalid_version(self):
        with pytest.raises(ModfileError, match="invalid version"):
            parse_modfile_bytes("go.mod", b"require github.com/a/b 1.0.0\n")

    def test_replace_without_arrow(self):
        with pytest.raises(ModfileError):
            parse_modfile_bytes("go.mod", b"replace a v1.0.0 b v1.0.0\n")

    def test_unterminated_block(self):
        with pytest.raises(ModfileError, match="unterminated require block"):
            parse_modfile_bytes("go.mod", b"require (\n\ta/b v1.0.0\n")

    def test_invalid_utf8(self):
        with pytest.raises(ModfileError):
            parse_modfile_bytes("go.mod", b"module \xff\xfe\n")

    def test_require_path_with_at_sign(self):
        with pytest.raises(ModfileError, match="go.mod:1: invalid module"):
            parse_modfile_bytes("go.mod", b"require example.com/x@v1 v1.0.0\n")

    def test_replace_path_with_at_sign(self):
        with pytest.raises(ModfileError, match="go.mod:2: invalid module"):
            parse_modfile_bytes(
                "go.mod", b"module m\nreplace example.com/a v1.0.0 => example.com/b@x v1.1.0\n"
            )


class TestParseModfile:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "go.mod"
        path.write_text("module m\n\nrequire a.com/b v1.0.0\n")
        mf = parse_modfile(path)
        assert mf.require == [Coordinate(path="a.com/b", version="v1.0.0")]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ModfileError, match="failed to read"):
            parse_modfile(tmp_path / "go.mod")


class TestCoordinatesOf:
    def test_includes_both_replace_sides(self):
        mf = parse_modfile_bytes("go.mod", SAMPLE)
        coords = [str(c) for c in coordinates_of(mf)]
        assert coords == [
            "github.com/BurntSushi/toml@v1.3.2",
            "golang.org/x/mod@v0.14.0",
            "github.com/spf13/cobra@v1.8.0",
            "github.com/old/dep@v1.0.0",
            "github.com/new/dep@v1.1.0",
            "example.com/quoted@v0.1.0",
            "example.com/fork@v0.2.0",
        ]
