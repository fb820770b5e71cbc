from __future__ import annotations

from typing import Any, Awaitable, Union

from fuel_regression.observability.instrumentation import (
    Instrumentation,
    NoOpInstrumentation,
)


class PipelineStep:
    """
    Pipeline Step base class (FINAL)

    Role:
      1. one stage of the regression run: read ctx slots, fill ctx slots
      2. step-level time boundary (parent scope, not recorded)

    Rules:
      - a step never swallows a stage failure
      - observability is optional; step behaviour never depends on it
      - run() may be sync or async; the pipeline awaits either
    """

    stage: str = ""

    def __init__(self, inst: Instrumentation | None = None):
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )

    @property
    def step_name(self) -> str:
        """Defaults to the class name."""
        return self.__class__.__name__

    def timed(self):
        return self.inst.timer(self.step_name, record=False)

    def run(self, ctx: Any) -> Union[Any, Awaitable[Any]]:
        raise NotImplementedError
