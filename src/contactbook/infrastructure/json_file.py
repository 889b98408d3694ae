"""Whole-document JSON file: {"<collection>": [...]} read and rewritten in full."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from contactbook.application.errors import PersistenceFailure

logger = logging.getLogger(__name__)


class JsonDocumentFile:
    """One JSON file holding a single named list of records.

    Writes go to a temporary file in the same directory which is then renamed
    over the target, so readers see either the old or the new document.
    """

    def __init__(self, path: Path | str, collection: str) -> None:
        self.path = Path(path)
        self.collection = collection

    def read(self) -> list[dict[str, Any]]:
        """Return the stored records. A missing file is an empty collection."""
        if not self.path.exists():
            logger.info("No storage file at %s, starting empty", self.path)
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Failed to load %s: %s", self.path, exc)
            raise PersistenceFailure(f"Failed to load {self.collection}") from exc
        if not isinstance(data, dict):
            logger.error("%s does not hold a JSON object", self.path)
            raise PersistenceFailure(f"Failed to load {self.collection}")
        records = data.get(self.collection) or []
        if not isinstance(records, list):
            logger.error("%s: '%s' is not a JSON array", self.path, self.collection)
            raise PersistenceFailure(f"Failed to load {self.collection}")
        return records

    def write(self, records: list[dict[str, Any]]) -> None:
        payload = json.dumps({self.collection: records}, indent=2)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.error("Failed to save %s: %s", self.path, exc)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceFailure(f"Failed to save {self.collection}") from exc
