import logging
import sys
from pythonjsonlogger.json import JsonFormatter


def setup_json_logger(level: str = "INFO"):
    handler = logging.StreamHandler(sys.stdout)
    formatter = JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.setLevel(logging.getLevelName(level.upper()))
    root.handlers = [handler]
