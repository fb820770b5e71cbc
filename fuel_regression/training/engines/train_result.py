from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class EpochMetrics:
    epoch: int
    loss: float
    mse: float

    def as_logs(self) -> Dict[str, float]:
        return {"loss": self.loss, "mse": self.mse}


@dataclass
class TrainingHistory:
    """
    TrainingHistory（FINAL）

    In-memory result of one fit; no I/O semantics.
    """

    epochs: List[EpochMetrics] = field(default_factory=list)
    batches_per_epoch: int = 0

    def append(self, metrics: EpochMetrics) -> None:
        self.epochs.append(metrics)

    @property
    def loss(self) -> List[float]:
        return [m.loss for m in self.epochs]

    @property
    def mse(self) -> List[float]:
        return [m.mse for m in self.epochs]

    @property
    def final_loss(self) -> float:
        if not self.epochs:
            return float("nan")
        return self.epochs[-1].loss

    def __len__(self) -> int:
        return len(self.epochs)
