"""
Row-parallel executor - fork/join over horizontal bands of a buffer.

The destination rows are split into a fixed number of contiguous bands and
each band is handed to one worker thread. Workers only write their own
destination rows; the source buffer is read-only for the whole pass, so
band functions may read rows outside their band. NumPy releases the GIL
during array operations, so band workers genuinely run concurrently.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, List, Tuple

from core.constants import ExecutorConstants
from core.image.buffer import PixelBuffer

logger = logging.getLogger(__name__)

# f(src, dst, y_start, y_end, extra)
BandFunction = Callable[[PixelBuffer, PixelBuffer, int, int, Any], None]


class RowParallelExecutor:
    """
    Splits [0, height) into num_workers bands and runs a band function on each.

    The executor is an explicit object owned by its caller. A fresh thread
    pool is created for every run() and joined before it returns.
    """

    def __init__(self, num_workers: int = ExecutorConstants.NUM_WORKERS):
        if num_workers < 1:
            raise ValueError(f"num_workers must be >= 1, got {num_workers}")
        self.num_workers = num_workers

    def bands(self, height: int) -> List[Tuple[int, int]]:
        """
        Partition rows into contiguous bands.

        Every band gets height // num_workers rows and the last band absorbs
        the remainder. Leading bands are empty when height < num_workers.
        """
        rows_per_band = height // self.num_workers
        bands = []
        for i in range(self.num_workers):
            start = i * rows_per_band
            end = height if i == self.num_workers - 1 else (i + 1) * rows_per_band
            bands.append((start, end))
        return bands

    def run(
        self,
        src: PixelBuffer,
        dst: PixelBuffer,
        func: BandFunction,
        extra: Any = None,
    ) -> None:
        """
        Run func over every band and block until all bands complete.

        Args:
            src: Source buffer (read-only during the pass)
            dst: Destination buffer with the same width/height as src
            func: Band function f(src, dst, y_start, y_end, extra)
            extra: Opaque argument forwarded to every call

        Raises:
            ValueError: If src and dst sizes differ
            Exception: The first exception raised by any band
        """
        if src.width != dst.width or src.height != dst.height:
            raise ValueError(
                f"Source {src.width}x{src.height} and destination "
                f"{dst.width}x{dst.height} differ in size"
            )

        bands = self.bands(src.height)
        logger.debug(f"Dispatching {getattr(func, '__name__', func)} over bands {bands}")

        with ThreadPoolExecutor(
            max_workers=self.num_workers, thread_name_prefix=ExecutorConstants.THREAD_NAME_PREFIX
        ) as pool:
            futures: List[Future] = [
                pool.submit(func, src, dst, start, end, extra) for start, end in bands
            ]
            for future in futures:
                future.result()
