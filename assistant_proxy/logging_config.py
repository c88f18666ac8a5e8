# assistant_proxy/logging_config.py
import logging
import sys

from assistant_proxy.config import LOG_LEVEL


def setup_logging():
    """
    Configure the root logger. Called once at startup from main.py.
    """
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
        stream=sys.stdout,
    )
    # Silence noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
