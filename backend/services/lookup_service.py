"""
Similar-place lookups: prompt the inference backend, keep an audit log
"""
import time
from datetime import datetime, timezone
from typing import List, Optional

from core.errors import InferenceError, LocationRequiredError, PersistenceError
from core.utils import get_logger
from database.logs import AppendOnlyLog
from models import LogRecord
from services.inference_service import TextCompletionBackend

logger = get_logger("lookup_service")


def build_prompt(user_location: str) -> str:
    """The location description is the whole user turn; the persona lives in the system instruction"""
    return f"{user_location}"


class LogWriter:
    """Writes log records with a bounded retry and counts the ones that never land"""

    def __init__(self, storage: AppendOnlyLog, attempts: int = 3, retry_delay: float = 0.5):
        self.storage = storage
        self.attempts = max(1, attempts)
        self.retry_delay = retry_delay
        self.failures = 0

    def write(self, record: LogRecord) -> bool:
        for attempt in range(1, self.attempts + 1):
            try:
                self.storage.append(record)
                return True
            except PersistenceError as e:
                logger.warning(
                    f"Log write attempt {attempt}/{self.attempts} failed: {e}",
                    extra={"user_location": record.user_location}
                )
                if attempt < self.attempts:
                    time.sleep(self.retry_delay)

        self.failures += 1
        logger.error(
            f"Dropping log record after {self.attempts} attempts",
            extra={"user_location": record.user_location, "failures": self.failures}
        )
        return False


class LookupService:
    """Finds places with similar sunrise/sunset times and records each lookup"""

    def __init__(
        self,
        backend: TextCompletionBackend,
        storage: AppendOnlyLog,
        system_instruction: str,
        write_attempts: int = 3,
        write_retry_delay: float = 0.5
    ):
        self.backend = backend
        self.storage = storage
        self.system_instruction = system_instruction
        self.log_writer = LogWriter(storage, attempts=write_attempts, retry_delay=write_retry_delay)

    async def find_similar_place(self, user_location: Optional[str]) -> str:
        """
        Ask the backend for a place with similar sunrise and sunset times.

        Raises:
            LocationRequiredError: user_location is missing or blank.
            InferenceError: the backend failed or answered with no text.
        """
        if not user_location or not user_location.strip():
            raise LocationRequiredError()

        logger.info(f"Looking up similar place for {user_location!r}")
        try:
            text = await self.backend.complete(build_prompt(user_location), self.system_instruction)
        except InferenceError:
            raise
        except Exception as e:
            raise InferenceError(str(e)) from e

        if not text or not text.strip():
            raise InferenceError("Inference backend returned empty text")
        return text

    def record_lookup(self, user_location: str, similar_place: str) -> Optional[LogRecord]:
        """Append one log record; failures are logged and counted, never raised"""
        record = LogRecord(
            user_location=user_location,
            similar_place=similar_place,
            timestamp=datetime.now(timezone.utc)
        )
        if self.log_writer.write(record):
            return record
        return None

    @property
    def failed_log_writes(self) -> int:
        return self.log_writer.failures

    def list_logs(self) -> List[LogRecord]:
        """Every stored record, oldest first"""
        return self.storage.list_all()
