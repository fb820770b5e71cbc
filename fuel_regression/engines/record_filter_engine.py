from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence

import numpy as np
import pandas as pd

from fuel_regression.config.data_config import MPG_TO_KMPL


@dataclass(frozen=True)
class CleanRecord:
    horsepower: float
    efficiency: float


class RecordFilterEngine:
    """
    RecordFilterEngine（FINAL / FROZEN）

    Responsibility:
    - Project raw heterogeneous records onto (horsepower, efficiency)
    - Convert the raw efficiency measure (mpg -> km/l)
    - Drop every record with a missing / non-numeric / non-finite field

    Contract:
    - Conversion runs BEFORE the validity mask,
      so a record whose conversion fails is dropped too
    - len(output) <= len(input)
    - Empty output is valid (not an error here)
    - No I/O, input records are never mutated
    """

    def __init__(
        self,
        *,
        horsepower_field: str = "Horsepower",
        efficiency_field: str = "Miles_per_Gallon",
        conversion_factor: float = MPG_TO_KMPL,
    ):
        if not conversion_factor > 0:
            raise ValueError(f"conversion_factor must be > 0, got {conversion_factor}")
        self.horsepower_field = horsepower_field
        self.efficiency_field = efficiency_field
        self.conversion_factor = conversion_factor

    def filter(self, records: Sequence[Mapping[str, Any]]) -> List[CleanRecord]:
        if len(records) == 0:
            return []

        df = pd.DataFrame.from_records(
            [self._project(r) for r in records],
            columns=["horsepower", "efficiency_raw"],
        )

        horsepower = self._to_numeric(df["horsepower"])
        efficiency = self._to_numeric(df["efficiency_raw"]) / self.conversion_factor

        # ==============================================================
        # Numeric sanitization: inf -> NaN, then drop incomplete rows
        # ==============================================================
        horsepower = horsepower.replace([np.inf, -np.inf], np.nan)
        efficiency = efficiency.replace([np.inf, -np.inf], np.nan)

        mask = horsepower.notna() & efficiency.notna()

        return [
            CleanRecord(horsepower=float(hp), efficiency=float(eff))
            for hp, eff in zip(horsepower[mask], efficiency[mask])
        ]

    def _project(self, record: Any) -> dict:
        if not isinstance(record, Mapping):
            return {"horsepower": None, "efficiency_raw": None}
        return {
            "horsepower": record.get(self.horsepower_field),
            "efficiency_raw": record.get(self.efficiency_field),
        }

    @staticmethod
    def _to_numeric(col: pd.Series) -> pd.Series:
        # bools and nested values are not measurements
        col = col.map(_scalar_or_none)
        return pd.to_numeric(col, errors="coerce").astype("float64")


def _scalar_or_none(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float, str, np.number)):
        return None
    try:
        # ints beyond float range overflow; unparsable strings raise ValueError
        return float(value)
    except (OverflowError, ValueError):
        return None
