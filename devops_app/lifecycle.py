import contextlib
import enum
import logging
import signal
from typing import Awaitable, Callable, List

import uvicorn

from .config import Settings

logger = logging.getLogger(__name__)

ShutdownHook = Callable[[], Awaitable[None]]


class Phase(enum.Enum):
    STARTING = "starting"
    SERVING = "serving"
    DRAINING = "draining"
    STOPPED = "stopped"


class LifecycleManager:
    """Service state machine: STARTING -> SERVING -> DRAINING -> STOPPED.

    A startup fault goes straight from STARTING to STOPPED. Drain hooks are
    registered by whoever owns a resource; the manager only runs them.
    """

    def __init__(self):
        self.phase = Phase.STARTING
        self._hooks: List[ShutdownHook] = []

    def _move(self, src: Phase, dst: Phase) -> None:
        if self.phase is not src:
            raise RuntimeError(f"cannot enter {dst.value} from {self.phase.value}")
        logger.debug("lifecycle %s -> %s", src.value, dst.value)
        self.phase = dst

    def on_shutdown(self, hook: ShutdownHook) -> None:
        self._hooks.append(hook)

    def serving(self) -> None:
        self._move(Phase.STARTING, Phase.SERVING)

    def abort(self, exc: BaseException) -> None:
        logger.error("Failed to start server: %r", exc)
        self._move(Phase.STARTING, Phase.STOPPED)

    async def drain(self) -> None:
        self._move(Phase.SERVING, Phase.DRAINING)
        logger.info("Shutting down gracefully")
        for hook in reversed(self._hooks):
            try:
                await hook()
            except Exception:
                logger.exception("shutdown hook %r failed", hook)
        self._hooks.clear()
        self._move(Phase.DRAINING, Phase.STOPPED)


class GracefulServer(uvicorn.Server):
    """uvicorn server that exits 0 after a SIGTERM/SIGINT drain.

    uvicorn re-raises captured signals once shutdown completes; they are dropped here.
    """

    def handle_exit(self, sig, frame):
        if not self.should_exit:
            logger.info("%s received, shutting down gracefully", signal.Signals(sig).name)
        super().handle_exit(sig, frame)

    @contextlib.contextmanager
    def capture_signals(self):
        with super().capture_signals():
            try:
                yield
            finally:
                self._captured_signals.clear()


def serve(app, settings: Settings) -> int:
    """Run until SIGTERM/SIGINT. Returns the process exit code."""
    config = uvicorn.Config(app, host=settings.host, port=settings.port, log_config=None, lifespan="on")
    server = GracefulServer(config)
    server.run()
    if not server.started:
        return 1
    return 0
