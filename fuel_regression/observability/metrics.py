#!filepath: fuel_regression/observability/metrics.py
from dataclasses import dataclass, field
from typing import Any, Dict, List

from fuel_regression.utils.logger import logs


@dataclass
class MetricRecorder:
    """
    Scalar metrics (last value wins) + append-only series (e.g. per-epoch loss).
    """

    enabled: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict)
    series: Dict[str, List[float]] = field(default_factory=dict)

    def record(self, name: str, value: Any):
        if not self.enabled:
            return
        self.metrics[name] = value
        logs.info(f"[Metric] {name} = {value}")

    def append(self, name: str, value: float):
        if not self.enabled:
            return
        self.series.setdefault(name, []).append(value)
        logs.debug(f"[Metric] {name}[{len(self.series[name]) - 1}] = {value}")
