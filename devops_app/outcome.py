from dataclasses import dataclass
from typing import Optional


def describe(exc: BaseException) -> str:
    # asyncio.TimeoutError carries no message
    return str(exc) or exc.__class__.__name__


@dataclass(frozen=True)
class Attempt:
    """Outcome of a side-channel datastore operation whose fault the caller may ignore."""

    error: Optional[BaseException] = None

    @classmethod
    def succeeded(cls) -> "Attempt":
        return cls()

    @classmethod
    def failed(cls, exc: BaseException) -> "Attempt":
        return cls(error=exc)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        return describe(self.error) if self.error is not None else None
