import logging
import sys

from .config import Settings
from .errors import ConfigError
from .lifecycle import serve
from .main import configure_logging, create_app


def main() -> int:
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        configure_logging("INFO")
        logging.getLogger(__name__).error("Failed to start server: %s", e)
        return 1
    configure_logging(settings.log_level)
    return serve(create_app(settings), settings)


if __name__ == "__main__":
    sys.exit(main())
