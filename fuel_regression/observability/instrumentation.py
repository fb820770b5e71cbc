#!filepath: fuel_regression/observability/instrumentation.py
from __future__ import annotations

from dataclasses import dataclass
from contextlib import contextmanager, nullcontext
from collections import OrderedDict
from typing import Dict

from fuel_regression.observability.progress import ProgressReporter
from fuel_regression.observability.timer import Timer
from fuel_regression.observability.metrics import MetricRecorder
from fuel_regression.observability.timeline_reporter import TimelineReporter


@dataclass
class Instrumentation:
    """
    Instrumentation（FINAL）

    Rules:
    1. timeline only holds leaf scopes (record=True)
    2. parent scopes (record=False) have no side effects
    3. no logging on the hot path (per batch)
    """

    enabled: bool = True
    progress_every: int = 10

    def __post_init__(self):
        self.progress = ProgressReporter(enabled=self.enabled, every=self.progress_every)
        self._timer = Timer(enabled=self.enabled)
        self.metrics = MetricRecorder(enabled=self.enabled)

        # timeline: OrderedDict[leaf_name, elapsed_seconds]
        self.timeline: Dict[str, float] = OrderedDict()

    def timer(self, name: str, *, record: bool = True):
        """
        Context-manager timer; the elapsed time is recorded
        even when the body raises.
        """
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            inst._timer.start(name)
            try:
                yield
            finally:
                elapsed = inst._timer.end(name)
                if record:
                    inst.timeline[name] = elapsed

        return _ctx()

    def generate_timeline_report(self, run_id: str) -> TimelineReporter:
        reporter = TimelineReporter(self.timeline, run_id)
        reporter.print()
        return reporter


class NoOpInstrumentation:
    """Used when observability is disabled."""

    def __init__(self):
        self.progress = ProgressReporter(enabled=False)
        self.metrics = MetricRecorder(enabled=False)
        self.timeline: Dict[str, float] = OrderedDict()

    def timer(self, name: str, *, record: bool = True):
        return nullcontext()

    def generate_timeline_report(self, run_id: str) -> None:
        return None
