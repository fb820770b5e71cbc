#!filepath: fuel_regression/observability/timeline_reporter.py
from typing import Dict

from fuel_regression.utils.logger import logs


class TimelineReporter:
    """
    Run timeline: step -> seconds
    """

    def __init__(self, timeline: Dict[str, float], run_id: str):
        self.timeline = timeline
        self.run_id = run_id

    def total(self) -> float:
        return float(sum(self.timeline.values()))

    def print(self):
        logs.info(f"[Timeline] ===== Pipeline timeline for run {self.run_id} =====")

        total = self.total()
        for name, sec in self.timeline.items():
            share = 100.0 * sec / total if total else 0.0
            logs.info(f"[Timeline] {str(name):<30} {sec:>8.3f}s {share:>5.1f}%")

        logs.info(f"[Timeline] Total{'':<27} {total:>8.3f}s")
        logs.info("[Timeline] ===========================================")
