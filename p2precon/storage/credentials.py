"""Saved credential stores.

A store is keyed by credential name, so names are unique per namespace.
Writes are synchronous and last-write-wins; no transactional guarantees.
Secrets are stored as given (no encryption).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from ..models import SavedCredential

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "binanceCredentials"


class CredentialStore(Protocol):
    """Capability required by callers that persist credentials."""

    def get(self, name: str) -> SavedCredential | None: ...

    def set(self, name: str, record: SavedCredential) -> None: ...

    def delete(self, name: str) -> None: ...

    def list(self) -> list[SavedCredential]: ...


def _keyed(name: str, record: SavedCredential) -> SavedCredential:
    if record.name != name:
        return record.model_copy(update={"name": name})
    return record


class InMemoryCredentialStore:
    """Process-local credential store."""

    def __init__(self) -> None:
        self._records: dict[str, SavedCredential] = {}

    def get(self, name: str) -> SavedCredential | None:
        return self._records.get(name)

    def set(self, name: str, record: SavedCredential) -> None:
        self._records[name] = _keyed(name, record)

    def delete(self, name: str) -> None:
        self._records.pop(name, None)

    def list(self) -> list[SavedCredential]:
        return list(self._records.values())


class JsonFileCredentialStore:
    """Credential store persisted as a JSON document.

    The file holds one object per namespace mapping to a list of records, so
    several namespaces can share a file. The whole file is rewritten on every
    change.
    """

    def __init__(self, path: str | Path, *, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.path = Path(path)
        self.namespace = namespace

    def _load_document(self) -> dict[str, list[dict]]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable credential file %s: %s", self.path, e)
            return {}
        if not isinstance(document, dict):
            logger.warning("Ignoring credential file %s: not a JSON object", self.path)
            return {}
        return document

    def _load(self) -> dict[str, SavedCredential]:
        records: dict[str, SavedCredential] = {}
        entries = self._load_document().get(self.namespace, [])
        if not isinstance(entries, list):
            return records
        for entry in entries:
            try:
                record = SavedCredential.model_validate(entry)
            except PydanticValidationError:
                logger.warning("Skipping malformed credential entry in %s", self.path)
                continue
            records[record.name] = record
        return records

    def _save(self, records: dict[str, SavedCredential]) -> None:
        document = self._load_document()
        document[self.namespace] = [r.model_dump() for r in records.values()]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(document, indent=2), encoding="utf-8")

    def get(self, name: str) -> SavedCredential | None:
        return self._load().get(name)

    def set(self, name: str, record: SavedCredential) -> None:
        records = self._load()
        records[name] = _keyed(name, record)
        self._save(records)

    def delete(self, name: str) -> None:
        records = self._load()
        if records.pop(name, None) is not None:
            self._save(records)

    def list(self) -> list[SavedCredential]:
        return list(self._load().values())
