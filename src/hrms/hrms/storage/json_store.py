from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from pathlib import Path
from typing import Union

from ..core.constants import DEFAULT_STORAGE_TIMEOUT_SECONDS
from ..core.exceptions import StorageError, StorageUnavailableError
from .document import Document
from .repository import DocumentStore

logger = logging.getLogger(__name__)


class JSONFileStore(DocumentStore):
    """Durable store keeping the whole document in one JSON file.

    Every persist writes a temporary file next to the target and swaps it in
    with ``os.replace``, so readers of the file only ever see the previous or
    the new version. File I/O runs on a single worker thread and is bounded
    by ``timeout`` seconds.
    """

    def __init__(self, path: Union[str, Path], *, timeout: float = DEFAULT_STORAGE_TIMEOUT_SECONDS):
        self._path = Path(path)
        self._timeout = float(timeout)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="json-store")

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Document:
        data = self._run(self._read)
        if data is None:
            document = Document.empty()
            try:
                self.persist(document)
            except StorageUnavailableError:
                raise
            except StorageError as e:
                raise StorageUnavailableError(f"Cannot initialize {self._path}") from e
            logger.info("Initialized empty document at %s", self._path)
            return document
        return Document.from_dict(data)

    def persist(self, document: Document) -> None:
        payload = document.to_dict()
        try:
            text = json.dumps(payload, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            raise StorageError("Document is not serializable") from e
        ticket = _WriteTicket()
        self._run(self._write, text, ticket, on_timeout=ticket.cancel)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def _run(self, fn, *args, on_timeout=None):
        future = self._executor.submit(fn, *args)
        try:
            return future.result(timeout=self._timeout)
        except FutureTimeoutError as e:
            if on_timeout is not None and not on_timeout():
                # The write was swapped in before the deadline was noticed.
                return None
            raise StorageUnavailableError(f"Storage operation timed out after {self._timeout}s") from e

    def _read(self):
        try:
            if not self._path.exists():
                return None
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageUnavailableError(f"Cannot read {self._path}") from e

        if not raw.strip():
            return None

        try:
            data = json.loads(raw)
        except ValueError as e:
            raise StorageUnavailableError(f"Corrupt document in {self._path}") from e
        if not isinstance(data, dict) or not all(
            isinstance(v, list) and all(isinstance(r, dict) for r in v) for v in data.values()
        ):
            raise StorageUnavailableError(f"Unexpected document layout in {self._path}")
        return data

    def _write(self, text: str, ticket: "_WriteTicket") -> None:
        directory = self._path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            with ticket.lock:
                if ticket.cancelled:
                    logger.warning("Discarded write to %s that finished after its timeout", self._path)
                    return
                os.replace(tmp_name, self._path)
                tmp_name = None
                ticket.committed = True
        except OSError as e:
            raise StorageError(f"Cannot write {self._path}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass


class _WriteTicket:
    """Decides, under one lock, whether a write lands or is abandoned."""

    def __init__(self):
        self.lock = threading.Lock()
        self.cancelled = False
        self.committed = False

    def cancel(self) -> bool:
        """Abandon the write; False if it was already swapped in."""
        with self.lock:
            if self.committed:
                return False
            self.cancelled = True
            return True
