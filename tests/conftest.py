from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import SYSTEM_INSTRUCTION
from core.errors import PersistenceError
from models import LogRecord
from services.lookup_service import LookupService


class FakeCompletionBackend:
    """Records every prompt and answers with a canned reply or error"""

    def __init__(self, reply: str = "A location with similar times is Ushuaia in Argentina.",
                 error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def complete(self, prompt: str, system_instruction: str) -> str:
        self.calls.append((prompt, system_instruction))
        if self.error is not None:
            raise self.error
        return self.reply


class FakeLogStore:
    """In-memory append-only log; the first `failures` appends raise"""

    def __init__(self, failures: int = 0, list_error: bool = False):
        self.records: List[LogRecord] = []
        self.failures = failures
        self.list_error = list_error
        self.append_attempts = 0
        self.closed = False

    def append(self, record: LogRecord) -> None:
        self.append_attempts += 1
        if self.failures > 0:
            self.failures -= 1
            raise PersistenceError("disk full")
        self.records.append(record)

    def list_all(self) -> List[LogRecord]:
        if self.list_error:
            raise PersistenceError("connection reset")
        return list(self.records)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def backend():
    return FakeCompletionBackend()


@pytest.fixture
def store():
    return FakeLogStore()


@pytest.fixture
def service(backend, store):
    return LookupService(
        backend=backend,
        storage=store,
        system_instruction=SYSTEM_INSTRUCTION,
        write_attempts=3,
        write_retry_delay=0
    )


@pytest.fixture
def client(service):
    return TestClient(create_app(lookup_service=service))

