#!filepath: fuel_regression/observability/progress.py
from fuel_regression.utils.logger import logs


class ProgressReporter:
    """
    Log-only progress (no tqdm / rich, safe under pytest).
    `every` throttles update() lines; the last step is always logged.
    """

    def __init__(self, enabled: bool = True, every: int = 1):
        self.enabled = enabled
        self.every = max(1, every)

    def start(self, task: str, total: int, unit: str = ""):
        if not self.enabled:
            return
        logs.info(f"[Progress] {task} started total={total} {unit}")

    def update(self, task: str, current: int, total: int, unit: str = ""):
        if not self.enabled:
            return
        if current % self.every and current != total:
            return
        pct = 100.0 * current / total if total else 100.0
        logs.info(f"[Progress] {task}: {current}/{total} {unit} ({pct:.0f}%)")

    def done(self, task: str):
        if not self.enabled:
            return
        logs.info(f"[Progress] {task} done")
