import threading
from typing import Dict, List, Optional

from string_analyzer.analysis import sha256_hex
from string_analyzer.errors import ConflictError, NotFoundError
from string_analyzer.schemas import AnalyzedString


class StringStore:
    """In-memory records keyed by content hash, kept in insertion order.

    Sync FastAPI handlers run in a threadpool, so every operation takes the
    same lock.
    """

    def __init__(self) -> None:
        self._records: Dict[str, AnalyzedString] = {}
        self._lock = threading.Lock()

    def add(self, record: AnalyzedString) -> AnalyzedString:
        with self._lock:
            if record.id in self._records:
                raise ConflictError("String already exists in the system")
            self._records[record.id] = record
        return record

    def get_by_id(self, string_id: str) -> Optional[AnalyzedString]:
        with self._lock:
            return self._records.get(string_id)

    def get_by_value(self, value: str) -> Optional[AnalyzedString]:
        return self.get_by_id(sha256_hex(value))

    def list(self) -> List[AnalyzedString]:
        """Snapshot of all records, oldest first."""
        with self._lock:
            return list(self._records.values())

    def delete(self, string_id: str) -> None:
        with self._lock:
            if string_id not in self._records:
                raise NotFoundError("String does not exist in the system")
            del self._records[string_id]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, string_id: object) -> bool:
        with self._lock:
            return string_id in self._records
