# fuel_regression/adapters/record_source.py
from __future__ import annotations

import copy
from typing import Any, Dict, List, Protocol, Sequence, runtime_checkable


@runtime_checkable
class RecordSource(Protocol):
    """
    Yields raw records (JSON objects) for one run.

    Any failure MUST surface as DataUnavailableError.
    """

    async def fetch(self) -> List[Dict[str, Any]]:
        ...


class StaticRecordSource:
    """
    In-memory records (harnesses, tests). Each fetch returns a deep copy,
    so the stored records stay immutable.
    """

    def __init__(self, records: Sequence[Dict[str, Any]]):
        self._records = copy.deepcopy(list(records))

    async def fetch(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._records)
