# fuel_regression/adapters/json_file_record_source.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from fuel_regression.utils.logger import logs
from fuel_regression.utils.errors import DataUnavailableError


class JsonFileRecordSource:
    """
    Reads a local JSON array (same layout as the public cars dataset).
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    async def fetch(self) -> List[Dict[str, Any]]:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise DataUnavailableError(f"cannot read {self.path}: {e}") from e
        except UnicodeDecodeError as e:
            raise DataUnavailableError(f"{self.path} is not UTF-8 text: {e}") from e
        except json.JSONDecodeError as e:
            raise DataUnavailableError(f"invalid JSON in {self.path}: {e}") from e

        if not isinstance(payload, list):
            raise DataUnavailableError(
                f"{self.path}: expected a JSON array, got {type(payload).__name__}"
            )

        logs.info(f"[JsonFileRecordSource] {len(payload)} records from {self.path}")
        return payload
