import logging
from rich.logging import RichHandler
def setup_logging(level: str = "INFO"):
    logging.basicConfig(level=level.upper(), format="%(message)s", datefmt="[%X]", handlers=[RichHandler(rich_tracebacks=True)])
    return logging.getLogger("remote_testkit")

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name if name.startswith("remote_testkit") else f"remote_testkit.{name}")
