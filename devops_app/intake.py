import json
import logging
from typing import Any, Mapping, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from .clock import now_iso
from .errors import ValidationError
from .outcome import Attempt

logger = logging.getLogger(__name__)

INSERT_SQL = "INSERT INTO process_logs (data, created_at) VALUES ($1, NOW())"


class ProcessResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    original: Any
    processed: bool = True
    timestamp: str
    processed_by: str = Field(alias="processedBy")

    def body(self) -> dict:
        return self.model_dump(by_alias=True)


class Intake(NamedTuple):
    result: ProcessResult
    persisted: Attempt


def payload_of(body: Any) -> Any:
    # present means the key exists and is not null; 0, false and "" are accepted
    if not isinstance(body, Mapping) or body.get("data") is None:
        raise ValidationError.missing("data")
    return body["data"]


async def persist(datastore, payload: Any) -> Attempt:
    try:
        await datastore.execute(INSERT_SQL, json.dumps(payload))
    except Exception as e:
        return Attempt.failed(e)
    return Attempt.succeeded()


async def process(datastore, body: Any, processed_by: str) -> Intake:
    payload = payload_of(body)
    logger.info("Processing request: %s", json.dumps(payload))

    attempt = await persist(datastore, payload)
    if not attempt.ok:
        logger.warning("Database write failed, continuing without persistence: %s", attempt.message)

    result = ProcessResult(original=payload, timestamp=now_iso(), processed_by=processed_by)
    return Intake(result, attempt)
