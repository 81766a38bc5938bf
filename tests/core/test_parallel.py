"""
Tests for RowParallelExecutor
"""

import threading

import pytest

from core.image.buffer import PixelBuffer
from core.parallel import RowParallelExecutor


class TestRowParallelExecutor:
    """Test band partitioning and dispatch"""

    def test_bands_last_absorbs_remainder(self):
        """Test that the last band takes the leftover rows"""
        executor = RowParallelExecutor()
        assert executor.bands(10) == [(0, 2), (2, 4), (4, 6), (6, 10)]

    def test_bands_cover_height_exactly(self):
        """Test that bands are contiguous and cover every row once"""
        executor = RowParallelExecutor()
        for height in (1, 3, 4, 17, 480):
            bands = executor.bands(height)
            assert len(bands) == 4
            assert bands[0][0] == 0
            assert bands[-1][1] == height
            for (_, end), (start, _) in zip(bands, bands[1:]):
                assert end == start

    def test_bands_small_height(self):
        """Test that leading bands are empty when height < workers"""
        executor = RowParallelExecutor()
        assert executor.bands(3) == [(0, 0), (0, 0), (0, 0), (0, 3)]

    def test_invalid_worker_count(self):
        with pytest.raises(ValueError):
            RowParallelExecutor(num_workers=0)

    def test_run_writes_every_row_once(self):
        """Test that each destination row is written by exactly one band"""
        src = PixelBuffer.create(5, 13, 1)
        dst = PixelBuffer.create(5, 13, 1)
        lock = threading.Lock()
        calls = []

        def mark(src, dst, y_start, y_end, extra):
            with lock:
                calls.append((y_start, y_end))
            dst.pixels[y_start:y_end] += extra

        RowParallelExecutor().run(src, dst, mark, 1)

        assert sorted(calls) == [(0, 3), (3, 6), (6, 9), (9, 13)]
        assert (dst.pixels == 1).all()

    def test_run_size_mismatch(self):
        """Test rejection of differently sized buffers"""
        with pytest.raises(ValueError):
            RowParallelExecutor().run(
                PixelBuffer.create(4, 4, 1),
                PixelBuffer.create(4, 5, 1),
                lambda *args: None,
            )

    def test_run_propagates_worker_errors(self):
        """Test that a band failure reaches the caller"""

        def boom(src, dst, y_start, y_end, extra):
            if y_start == 0 and y_end > 0:
                raise RuntimeError("band failed")

        with pytest.raises(RuntimeError, match="band failed"):
            RowParallelExecutor().run(
                PixelBuffer.create(4, 8, 1), PixelBuffer.create(4, 8, 1), boom
            )
