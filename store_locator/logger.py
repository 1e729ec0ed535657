import logging
import logging.handlers
import os

from store_locator.core.config import settings

LOG_FORMAT = "[ %(asctime)s ] %(lineno)d %(name)s - %(levelname)s - %(message)s"

os.makedirs(settings.LOG_DIR, exist_ok=True)
LOG_FILE_PATH = os.path.join(settings.LOG_DIR, "store_locator.log")

file_handler = logging.handlers.RotatingFileHandler(
    LOG_FILE_PATH,
    maxBytes=5 * 1024 * 1024,
    backupCount=3
)
stream_handler = logging.StreamHandler()

logging.basicConfig(
    format=LOG_FORMAT,
    level=settings.LOG_LEVEL.upper(),
    handlers=[file_handler, stream_handler]
)
