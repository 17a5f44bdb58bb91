import atexit
import json
import logging
import logging.config
from pathlib import Path

# Configure logging
logger = logging.getLogger("SchemaMerger")

_CONFIG_FILE = Path(__file__).parent / "logging_config.json"


def setup_logger(level: str | None = None) -> None:
    """Apply logging_config.json and start the queue listener.

    Args:
        level: Optional level name overriding the console handler's level
    """
    with open(_CONFIG_FILE, encoding="utf-8") as f:
        config = json.load(f)
    if level:
        config["handlers"]["stderr"]["level"] = level.upper()
        config["loggers"]["SchemaMerger"]["level"] = level.upper()
    logging.config.dictConfig(config)
    queue_handler = logging.getHandlerByName("queue_handler")
    if queue_handler is not None and hasattr(queue_handler, "listener"):
        # Type checker doesn't understand hasattr, so we access listener safely
        listener = getattr(queue_handler, "listener", None)
        if listener is not None:
            listener.start()
            atexit.register(listener.stop)

