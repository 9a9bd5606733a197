class ConfigError(RuntimeError):
    """Environment configuration could not be parsed."""


class ValidationError(ValueError):
    """Caller-supplied request is malformed. Maps to 400."""

    def __init__(self, message: str, field: str = ""):
        super().__init__(message)
        self.field = field

    @classmethod
    def missing(cls, field: str) -> "ValidationError":
        return cls(f"Missing required field: {field}", field=field)
