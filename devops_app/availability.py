import logging
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel

from .clock import now_iso
from .outcome import describe

logger = logging.getLogger(__name__)

PROBE_SQL = "SELECT NOW()"


class StatusReport(BaseModel):
    status: Literal["operational", "degraded"]
    timestamp: str
    database: Literal["connected", "disconnected"]
    environment: str
    error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.status == "degraded"

    def body(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"status": self.status, "timestamp": self.timestamp, "database": self.database}
        if self.degraded:
            out["error"] = self.error
        else:
            out["environment"] = self.environment
        return out


async def probe(datastore, environment: str) -> StatusReport:
    """Round-trip a trivial query and classify the datastore. Re-probes on every call."""
    try:
        await datastore.fetchval(PROBE_SQL)
    except Exception as e:
        logger.error("Database connection error: %r", e)
        return StatusReport(
            status="degraded",
            timestamp=now_iso(),
            database="disconnected",
            environment=environment,
            error=describe(e),
        )
    return StatusReport(status="operational", timestamp=now_iso(), database="connected", environment=environment)
