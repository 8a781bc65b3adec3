"""Performance metrics for page loads, component renders and API calls."""

import functools
import time
import tracemalloc
from dataclasses import asdict, dataclass, field
from typing import Any, Awaitable, Callable, TypeVar

from ..core.lifecycle import RenderScope
from ..core.observability import API_CALL_DURATION, get_logger

T = TypeVar("T")

logger = get_logger(__name__)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


def _mean(samples: list[float]) -> float:
    return sum(samples) / len(samples) if samples else 0


@dataclass
class PerformanceMetrics:
    """Recorded samples, in milliseconds."""

    page_load_times: dict[str, float] = field(default_factory=dict)
    component_render_times: dict[str, list[float]] = field(default_factory=dict)
    api_call_times: dict[str, list[float]] = field(default_factory=dict)
    memory_usage: dict[str, dict[str, Any]] = field(default_factory=dict)


@dataclass
class PerformanceSummary:
    average_page_load_time: float = 0
    average_component_render_time: float = 0
    average_api_call_time: float = 0
    total_api_calls: int = 0
    total_components: int = 0


class PerformanceMonitor:
    """
    Accumulates timing samples for one client session.

    Samples are appended until ``clear_metrics()``. Page and component timings
    measure the time from tracking to the scope's mount.
    """

    def __init__(self, session_id: str | None = None):
        self.metrics = PerformanceMetrics()
        self.logger = logger.with_context(session_id=session_id) if session_id else logger

    def track_page_load(self, page_name: str, scope: RenderScope) -> None:
        start = time.perf_counter()

        def record() -> None:
            load_time = _elapsed_ms(start)
            self.metrics.page_load_times[page_name] = load_time
            self.logger.info("page_load", page=page_name, duration_ms=round(load_time, 2))

        scope.on_mounted(record)

    def track_component_render(self, component_name: str, scope: RenderScope) -> None:
        start = time.perf_counter()

        def record() -> None:
            render_time = _elapsed_ms(start)
            self.metrics.component_render_times.setdefault(component_name, []).append(render_time)
            self.logger.info("component_render", component=component_name, duration_ms=round(render_time, 2))

        scope.on_mounted(record)

    async def track_api_call(self, api_name: str, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Await ``operation()`` and record how long it took.

        A failure is logged with its elapsed time and re-raised unchanged;
        nothing is recorded for it.
        """
        start = time.perf_counter()
        try:
            result = await operation()
        except Exception as e:
            self.logger.error(
                "api_call_failed",
                api=api_name,
                duration_ms=round(_elapsed_ms(start), 2),
                error=str(e),
            )
            raise

        call_time = _elapsed_ms(start)
        self.metrics.api_call_times.setdefault(api_name, []).append(call_time)
        API_CALL_DURATION.labels(api_name=api_name).observe(call_time / 1000)
        self.logger.info("api_call", api=api_name, duration_ms=round(call_time, 2))
        return result

    def track_memory_usage(self, context: str) -> None:
        """Snapshot heap usage when tracemalloc is tracing; otherwise do nothing."""
        if not tracemalloc.is_tracing():
            return

        used, peak = tracemalloc.get_traced_memory()
        self.metrics.memory_usage[context] = {
            "used_heap_size": used,
            "peak_heap_size": peak,
            "timestamp": time.time(),
        }
        self.logger.info(
            "memory_usage",
            context=context,
            used_mb=round(used / 1024 / 1024, 2),
            peak_mb=round(peak / 1024 / 1024, 2),
        )

    def get_performance_summary(self) -> PerformanceSummary:
        page_load_times = list(self.metrics.page_load_times.values())
        component_times = [
            sample for samples in self.metrics.component_render_times.values() for sample in samples
        ]
        api_times = [sample for samples in self.metrics.api_call_times.values() for sample in samples]

        return PerformanceSummary(
            average_page_load_time=_mean(page_load_times),
            average_component_render_time=_mean(component_times),
            average_api_call_time=_mean(api_times),
            total_api_calls=len(api_times),
            total_components=len(component_times),
        )

    def clear_metrics(self) -> None:
        self.metrics = PerformanceMetrics()

    def export_metrics(self) -> dict[str, Any]:
        """Log and return the summary together with every recorded sample."""
        summary = asdict(self.get_performance_summary())
        details = asdict(self.metrics)
        self.logger.info("performance_summary", **summary)
        self.logger.debug("performance_details", **details)
        return {"summary": summary, "details": details}


def with_performance_tracking(monitor: PerformanceMonitor, api_name: str):
    """Decorate an async callable so every call is tracked under ``api_name``."""

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            return await monitor.track_api_call(api_name, lambda: func(*args, **kwargs))

        return wrapper

    return decorator


class ComponentPerformance:
    """Tracks a component's render time and memory snapshot when its scope mounts."""

    def __init__(self, monitor: PerformanceMonitor, component_name: str, scope: RenderScope):
        self.monitor = monitor
        self.component_name = component_name
        self.scope = scope

        monitor.track_component_render(component_name, scope)
        scope.on_mounted(self.track_memory)

    def track_render(self) -> None:
        self.monitor.track_component_render(self.component_name, self.scope)

    def track_memory(self) -> None:
        self.monitor.track_memory_usage(self.component_name)
