from numan.utils.spinner import Spinner
from numan.utils.tb_logger import setup_logging, get_logger

__all__ = [
    "Spinner",
    "setup_logging",
    "get_logger",
]
