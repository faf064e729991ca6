"""Registration Store

Visitor contact details kept in a single JSON file holding an array of
records. Every registration reads the whole array, appends one record and
writes the whole array back.

Writes from this process are serialised by a lock and land through an atomic
rename, so two registrations cannot lose each other's record or both pass
the duplicate-email check. Nothing coordinates separate processes sharing the
same file.
"""
import json
import logging
import os
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from models.visitor import VisitorRecord

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    """UTC time with millisecond precision, e.g. 2025-01-01T08:30:00.123Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RegistrationError(Exception):
    """A registration rejected because of the caller's input."""
    message = "Registration rejected"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class MissingFieldsError(RegistrationError):
    message = "Name and Email are required"


class DuplicateEmailError(RegistrationError):
    message = "Email already registered"


@dataclass
class StoreConfig:
    path: Path


class RegistrationStore:
    """Append-only collection of VisitorRecords backed by one JSON file."""

    def __init__(self, config: StoreConfig):
        self.path = Path(config.path)
        self._lock = threading.Lock()
        self._ensure_file()

    def _ensure_file(self):
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._write([])
        logger.info(f"Initialized empty visitor store at {self.path}")

    def read_all(self) -> List[VisitorRecord]:
        """Return every stored record; a missing or unreadable file counts as empty."""
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            return [VisitorRecord.from_dict(item) for item in data]
        except FileNotFoundError:
            return []
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Failed to read visitor store {self.path}, treating as empty: {e}")
            return []

    def register(self, name: Optional[str], email: Optional[str], phone: Optional[str] = None) -> int:
        """
        Persist a new visitor and return its id.

        Raises:
            MissingFieldsError: name or email is missing.
            DuplicateEmailError: a record with this email already exists.
            OSError: the backing file could not be written.
        """
        if not name or not email:
            raise MissingFieldsError()

        with self._lock:
            records = self.read_all()
            if any(r.email == email for r in records):
                raise DuplicateEmailError()

            record = VisitorRecord(
                id=self._next_id(records),
                name=name,
                email=email,
                phone=phone,
                registered_at=_utc_timestamp(),
            )
            records.append(record)
            self._write([r.to_dict() for r in records])

        logger.info(f"Registered visitor {record.id}")
        return record.id

    @staticmethod
    def _next_id(records: List[VisitorRecord]) -> int:
        # Millisecond clock, bumped past the newest id when the clock has not advanced
        now_ms = int(time.time() * 1000)
        # Hand-edited records may carry non-integer ids; they take no part
        highest = max((r.id for r in records
                       if isinstance(r.id, int) and not isinstance(r.id, bool)), default=0)
        return max(now_ms, highest + 1)

    def _write(self, payload: list):
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.path)
