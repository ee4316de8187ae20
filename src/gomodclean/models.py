"""Data models for gomodclean."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """A module path and version identifying one cached module, e.g. ``golang.org/x/mod@v0.14.0``.

    Both fields hold the decoded (unescaped) form, so equality is exact
    string equality regardless of how the cache spells them on disk.
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., pattern=r"^[^@]+$", description="Module path, never contains '@'")
    version: str = Field(..., pattern=r"^[^@]+$", description="Module version, non-empty")

    def __str__(self) -> str:
        return f"{self.path}@{self.version}"


class ModuleRef(BaseModel):
    """One side of a replace directive; version is None for path-only references."""

    model_config = ConfigDict(frozen=True)

    path: str
    version: Optional[str] = None

    def coordinate(self) -> Coordinate | None:
        if not self.version:
            return None
        return Coordinate(path=self.path, version=self.version)


class ReplaceDirective(BaseModel):
    """A ``replace old [version] => new [version]`` directive."""

    old: ModuleRef
    new: ModuleRef


class Modfile(BaseModel):
    """Parsed go.mod contents relevant to cache reachability."""

    module: Optional[str] = Field(None, description="Declared module path")
    require: list[Coordinate] = Field(default_factory=list)
    replace: list[ReplaceDirective] = Field(default_factory=list)


class CleanerConfig(BaseModel):
    """Explicit configuration passed into the engine entry point."""

    cache_path: Path = Field(..., description="Module cache root ($GOMODCACHE)")
    modfile_paths: list[Path] = Field(
        ..., min_length=1, description="go.mod files or directories containing them"
    )
    transitive: bool = Field(
        True, description="Follow dependency go.mod files found in the cache"
    )
    verbose: bool = Field(False, description="Enable debug logging")
    max_workers: int = Field(8, ge=1, description="Concurrent size computations")


class Analysis(BaseModel):
    """Result of comparing the module cache against the in-use set."""

    unused_extracted: list[Coordinate] = Field(default_factory=list)
    unused_downloaded: list[Coordinate] = Field(default_factory=list)
    extracted_count: int = Field(0, description="Extracted entries found in the cache")
    downloaded_count: int = Field(0, description="Downloaded entries found in the cache")
    in_use_count: int = Field(0, description="Coordinates reachable from the go.mod roots")
    total_bytes: int = Field(0, description="Bytes occupied by the unused entries")

    @property
    def unused_count(self) -> int:
        """Number of unused entries across both inventories."""
        return len(self.unused_extracted) + len(self.unused_downloaded)


class CleanupResult(BaseModel):
    """Result of a removal run."""

    removed_paths: list[str] = Field(default_factory=list)
    rewritten_indexes: list[str] = Field(
        default_factory=list, description="Module paths whose @v/list was rewritten"
    )
    index_errors: dict[str, str] = Field(
        default_factory=dict, description="Module path -> rewrite error"
    )

    @property
    def success(self) -> bool:
        return not self.index_errors
