"""Tests for concurrent size calculation."""

from unittest.mock import patch

import pytest

from gomodclean.errors import ScanError, SizeCalculationError
from gomodclean.models import Coordinate
from gomodclean.sizer import calculate_size


def C(value: str) -> Coordinate:
    path, version = value.split("@")
    return Coordinate(path=path, version=version)


class TestCalculateSize:
    def test_sums_all_entries(self, fake_cache):
        fake_cache.extracted("example.com/a", "v1.0.0", size=100)
        fake_cache.extracted("example.com/b", "v1.0.0", size=250)
        fake_cache.downloaded("example.com/a", "v1.0.0", size=7)  # 4 files

        total = calculate_size(
            fake_cache.root,
            [C("example.com/a@v1.0.0"), C("example.com/b@v1.0.0")],
            [C("example.com/a@v1.0.0")],
        )
        assert total == 100 + 250 + 4 * 7

    def test_empty(self, fake_cache):
        assert calculate_size(fake_cache.root, [], []) == 0

    def test_single_worker(self, fake_cache):
        for i in range(5):
            fake_cache.extracted(f"example.com/m{i}", "v1.0.0", size=10)

        coords = [C(f"example.com/m{i}@v1.0.0") for i in range(5)]
        assert calculate_size(fake_cache.root, coords, [], max_workers=1) == 50

    def test_failure_discards_total(self, fake_cache):
        fake_cache.extracted("example.com/a", "v1.0.0", size=100)

        with pytest.raises(SizeCalculationError) as exc_info:
            calculate_size(
                fake_cache.root,
                [C("example.com/a@v1.0.0"), C("example.com/missing@v1.0.0")],
                [C("example.com/gone@v1.0.0")],
            )

        assert len(exc_info.value.errors) == 2
        assert all(isinstance(e, ScanError) for e in exc_info.value.errors)

    def test_every_task_runs_despite_failure(self, fake_cache):
        coords = [C(f"example.com/m{i}@v1.0.0") for i in range(4)]
        calls = []

        def fake_size(cache, coord):
            calls.append(coord)
            if coord.path.endswith("m0"):
                raise ScanError("boom")
            return 1

        with patch("gomodclean.sizer.extracted_mod_size", side_effect=fake_size):
            with pytest.raises(SizeCalculationError, match="boom"):
                calculate_size(fake_cache.root, coords, [], max_workers=2)

        assert sorted(c.path for c in calls) == sorted(c.path for c in coords)

    def test_progress_callback(self, fake_cache):
        fake_cache.extracted("example.com/a", "v1.0.0")
        fake_cache.extracted("example.com/b", "v1.0.0")
        seen = []

        calculate_size(
            fake_cache.root,
            [C("example.com/a@v1.0.0"), C("example.com/b@v1.0.0")],
            [],
            progress_callback=lambda done, total: seen.append((done, total)),
        )
        assert seen == [(1, 2), (2, 2)]
