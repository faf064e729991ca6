"""Observability Module - Logging, Tracing, and Metrics

This module provides:
1. Process-wide logging configuration
2. Tracing of every call made to the Gemini collaborator
3. Per-call-name counts, failures and mean latency for those calls
"""
import logging
import functools
import threading
import time
from typing import Dict, Any, Callable
from dataclasses import dataclass

from config.settings import LOG_LEVEL

LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'


def configure_logging(level: str = LOG_LEVEL):
    """Configure root logging once for the server and the console."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S'
    )


logger = logging.getLogger("jyotishi")


@dataclass
class CallStats:
    """Running totals for one call name; constant size however many calls."""
    count: int = 0
    failures: int = 0
    total_ms: float = 0.0

    @property
    def mean_ms(self) -> float:
        return self.total_ms / self.count if self.count else 0.0


class CallMetrics:
    """Thread-safe aggregate of collaborator calls, keyed by call name.

    FastAPI runs sync endpoints in a thread pool, so every update and read
    holds `_lock`.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._stats: Dict[str, CallStats] = {}

    def record(self, call_name: str, duration_ms: float, success: bool):
        with self._lock:
            stats = self._stats.setdefault(call_name, CallStats())
            stats.count += 1
            stats.total_ms += duration_ms
            if not success:
                stats.failures += 1

    def stats(self, call_name: str) -> CallStats:
        with self._lock:
            s = self._stats.get(call_name, CallStats())
            return CallStats(s.count, s.failures, s.total_ms)

    def summary(self) -> Dict[str, Any]:
        """Return metrics summary."""
        with self._lock:
            total = sum(s.count for s in self._stats.values())
            failed = sum(s.failures for s in self._stats.values())
            total_ms = sum(s.total_ms for s in self._stats.values())
            call_avg = {name: round(s.mean_ms, 1) for name, s in self._stats.items()}

        success_rate = (total - failed) / total if total else 0.0
        avg_ms = total_ms / total if total else 0.0
        return {
            "total_requests": total,
            "failed_requests": failed,
            "success_rate": f"{success_rate:.1%}",
            "avg_latency_ms": f"{avg_ms:.0f}ms",
            "call_avg_latency": call_avg
        }

    def reset(self):
        with self._lock:
            self._stats = {}


# Global metrics instance
metrics = CallMetrics()


class Tracer:
    """Times one collaborator call, logs its outcome and records it in `metrics`."""

    def __init__(self, call_name: str):
        self.call_name = call_name
        self._started = 0.0

    def __enter__(self):
        logger.info(f"▶ {self.call_name} started")
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration_ms = (time.perf_counter() - self._started) * 1000
        if exc_type:
            logger.error(f"✖ {self.call_name} failed after {duration_ms:.0f}ms: {exc_val}")
        else:
            logger.info(f"✔ {self.call_name} completed in {duration_ms:.0f}ms")

        metrics.record(self.call_name, duration_ms, success=exc_type is None)
        return False  # Don't suppress exceptions


def traced(call_name: str) -> Callable:
    """Decorator that wraps a method in a Tracer named `call_name`."""
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            with Tracer(call_name):
                return func(self, *args, **kwargs)
        return wrapper
    return decorator


def get_metrics_summary() -> Dict[str, Any]:
    """Get current metrics summary for the API."""
    return metrics.summary()
