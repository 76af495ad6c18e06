from dataclasses import dataclass, field
from typing import Protocol


class MetricsHook(Protocol):
    def record_latency(
        self,
        name: str,
        value_ms: float,
        labels: dict[str, str] | None = None,
    ) -> None: ...

    def increment(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None: ...

    def record_gauge(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None: ...


class NoOpMetricsHook:
    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        pass

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        pass

    def record_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        pass


@dataclass
class InMemoryMetricsHook:
    """Keeps every recorded value in memory.

    Useful for tests and for callers that want to inspect a single request's
    metrics without wiring a real backend. ``counters`` holds the total per
    metric name across all labels; ``labelled_counters`` splits it by label
    set. Use ``count`` to read either.
    """

    latencies: dict[str, list[float]] = field(default_factory=dict)
    counters: dict[str, int] = field(default_factory=dict)
    labelled_counters: dict[tuple[str, frozenset[tuple[str, str]]], int] = field(
        default_factory=dict
    )
    gauges: dict[str, float] = field(default_factory=dict)

    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        self.latencies.setdefault(name, []).append(value_ms)

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        self.counters[name] = self.counters.get(name, 0) + value
        if labels:
            key = (name, frozenset(labels.items()))
            self.labelled_counters[key] = self.labelled_counters.get(key, 0) + value

    def record_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        self.gauges[name] = value

    def count(self, name: str, **labels: str) -> int:
        """Counter total for ``name``, narrowed to one label set when given."""
        if not labels:
            return self.counters.get(name, 0)
        return self.labelled_counters.get((name, frozenset(labels.items())), 0)
