# __main__.py
import logging

import uvicorn

from . import config
from .main import create_app

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = create_app()

if __name__ == "__main__":
    logger.info(f"Server running on port {config.PORT}")
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
