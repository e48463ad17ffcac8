import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("gridtrie")


class StageTimer:
    """Per-stage timings (ms) and counters for one parse/enumerate/query run."""

    def __init__(self):
        self.timings: dict[str, float] = {}
        self.counters: dict[str, int] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.timings[name] = round((time.perf_counter() - t0) * 1000, 1)
            logger.info("stage=%s elapsed=%.1fms", name, self.timings[name])

    def record(self, name: str, value: int):
        self.counters[name] = value
        logger.info("%s=%d", name, value)

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**self.timings, "total": self.total_ms}
