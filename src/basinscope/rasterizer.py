"""
Parallel rasterizer for basin-of-attraction images.

The image is cut into bands of whole rows. Each band is one pool task
and covers a contiguous, disjoint range of pixel indices, so workers
write straight into a shared RGB buffer without locking. Every task
also owns one slot of a shared counter array; the progress monitor
sums the slots.

Rows are integrated as a single numpy batch, so progress advances by
one full row (`width` pixels) at a time rather than pixel by pixel.
"""

import ctypes
import multiprocessing
import sys
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional, Sequence, TextIO, Tuple

import numpy as np

from basinscope.config import RenderConfig
from basinscope.core.classifier import classify_many, colors_for
from basinscope.core.field import Attractor
from basinscope.core.integrator import simulate_many
from basinscope.progress import ProgressMonitor

CHANNELS = 3


@dataclass
class RenderedArtifact:
    """A finished render: raw RGB bytes plus what is needed to save them."""
    pixels: np.ndarray  # flat uint8, width * height * 3
    width: int
    height: int
    timestamp: int  # run start, seconds since epoch


def pixel_to_sim(i: int, width: int, height: int, zoom: float) -> Tuple[float, float]:
    """Map a linear pixel index to simulation-space coordinates."""
    x = i % width
    y = i // width
    sim_x = zoom * ((x / width) * 2 - 1)
    sim_y = zoom * ((y / height) * 2 - 1)
    return sim_x, sim_y


def row_coordinates(y: int, width: int, height: int, zoom: float) -> Tuple[np.ndarray, np.ndarray]:
    """Simulation-space coordinates of every pixel in image row `y`."""
    xs = zoom * ((np.arange(width, dtype=np.float64) / width) * 2 - 1)
    ys = np.full(width, zoom * ((y / height) * 2 - 1), dtype=np.float64)
    return xs, ys


def render_row(
    attractors: Sequence[Attractor],
    y: int,
    width: int,
    height: int,
    zoom: float,
    **integrator_params,
) -> np.ndarray:
    """Integrate and color one image row; returns a (width, 3) uint8 array."""
    xs, ys = row_coordinates(y, width, height, zoom)
    end_x, end_y = simulate_many(attractors, xs, ys, **integrator_params)
    return colors_for(classify_many(attractors, end_x, end_y))


def plan_tasks(height: int, chunk_rows: int) -> List[Tuple[int, int, int]]:
    """Split the image into (task_index, row_start, row_stop) bands."""
    return [
        (task_index, start, min(start + chunk_rows, height))
        for task_index, start in enumerate(range(0, height, chunk_rows))
    ]


# Per-process state, filled in by the pool initializer
_worker: dict = {}


def _init_worker(pixels, counts, config: RenderConfig, attractors: Tuple[Attractor, ...]):
    _worker["pixels"] = np.frombuffer(pixels, dtype=np.uint8)
    _worker["counts"] = np.frombuffer(counts, dtype=np.uint64)
    _worker["config"] = config
    _worker["attractors"] = attractors
    _worker["params"] = config.integrator_params()


def _render_band(task_index: int, row_start: int, row_stop: int) -> int:
    pixels = _worker["pixels"]
    counts = _worker["counts"]
    cfg: RenderConfig = _worker["config"]
    row_bytes = cfg.width * CHANNELS

    for y in range(row_start, row_stop):
        colors = render_row(
            _worker["attractors"], y, cfg.width, cfg.height, cfg.zoom, **_worker["params"]
        )
        pixels[y * row_bytes:(y + 1) * row_bytes] = colors.ravel()
        counts[task_index] += np.uint64(cfg.width)

    return (row_stop - row_start) * cfg.width


class BasinRasterizer:
    """
    Renders the basin image across a process pool.

    The progress monitor runs for the whole render and is stopped and
    joined before `render` returns, on success and on failure. Any
    exception raised in a worker aborts the render and propagates.
    """

    def __init__(
        self,
        config: RenderConfig | None = None,
        progress_stream: Optional[TextIO] = None,
        mp_context=None,
    ):
        self.cfg = (config or RenderConfig()).validate()
        self.progress_stream = progress_stream or sys.stdout
        self.mp_context = mp_context or multiprocessing.get_context()
        self.attractors = self.cfg.resolved_attractors()

        self.monitor: ProgressMonitor | None = None
        self._counts: np.ndarray | None = None

    @property
    def completed(self) -> int:
        """Pixels finished so far in the current or last render."""
        if self._counts is None:
            return 0
        return int(self._counts.sum())

    def render(self) -> RenderedArtifact:
        cfg = self.cfg
        timestamp = int(time.time())
        tasks = plan_tasks(cfg.height, cfg.chunk_rows)

        pixels = self.mp_context.RawArray(ctypes.c_uint8, cfg.buffer_size)
        counts = self.mp_context.RawArray(ctypes.c_uint64, len(tasks))
        self._counts = np.frombuffer(counts, dtype=np.uint64)

        self.monitor = ProgressMonitor(
            lambda: self.completed,
            total=cfg.total_pixels,
            interval=cfg.progress_interval,
            stream=self.progress_stream,
        )
        try:
            self._run_pool(pixels, counts, tasks)
        finally:
            self.monitor.stop()

        return RenderedArtifact(
            pixels=np.frombuffer(pixels, dtype=np.uint8),
            width=cfg.width,
            height=cfg.height,
            timestamp=timestamp,
        )

    def _run_pool(self, pixels, counts, tasks):
        cfg = self.cfg
        with ProcessPoolExecutor(
            max_workers=min(cfg.workers, len(tasks)),
            mp_context=self.mp_context,
            initializer=_init_worker,
            initargs=(pixels, counts, cfg, self.attractors),
        ) as executor:
            futures = [executor.submit(_render_band, *task) for task in tasks]
            # Start the monitor only after the pool has forked its workers
            self.monitor.start()
            try:
                for future in as_completed(futures):
                    future.result()
            except BaseException:
                executor.shutdown(wait=True, cancel_futures=True)
                raise


def rasterize(
    config: RenderConfig | None = None,
    progress_stream: Optional[TextIO] = None,
) -> RenderedArtifact:
    """Render a basin image with `config` and return the artifact."""
    return BasinRasterizer(config, progress_stream=progress_stream).render()
