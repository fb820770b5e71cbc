# fuel_regression/config/training_config.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class TrainingConfig(BaseModel):
    """
    TrainingConfig（FINAL）
    """

    batch_size: int = Field(32, ge=1)
    epochs: int = Field(50, ge=1)
    shuffle: bool = True

    # Adam
    learning_rate: float = Field(1e-3, gt=0)

    # None -> nondeterministic shuffles / init
    seed: Optional[int] = None
