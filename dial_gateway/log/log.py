import logging
import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger as loguru_logger

from dial_gateway.settings import Settings, settings as default_settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[source]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def _loguru_level(record: logging.LogRecord) -> Union[str, int]:
    # 自定义的标准 logging 级别在 loguru 中不存在，直接用数值
    try:
        return loguru_logger.level(record.levelname).name
    except ValueError:
        return record.levelno


class InterceptHandler(logging.Handler):
    """把 dial_gateway 各模块的标准 logging 记录转交给 loguru，保留原 logger 名。"""

    def emit(self, record: logging.LogRecord) -> None:
        # 跳过 logging 模块内部的栈帧，定位到真正的调用方
        frame = logging.currentframe()
        depth = 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        loguru_logger.bind(source=record.name).opt(
            depth=depth,
            exception=record.exc_info,
        ).log(_loguru_level(record), record.getMessage())


class Loggin:
    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or default_settings
        self.level = "DEBUG" if self.settings.debug else "INFO"

    def setup_logger(self):
        loguru_logger.remove()
        # 直接调用 loguru 的记录没有 source，回退为模块名
        loguru_logger.configure(patcher=lambda message: message["extra"].setdefault("source", message["name"]))
        loguru_logger.add(sink=sys.stderr, level=self.level, format=LOG_FORMAT)

        logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

        if self.settings.log_to_file:
            file_path = Path(self.settings.log_file_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            loguru_logger.add(
                sink=str(file_path),
                level=self.level,
                format=LOG_FORMAT,
                rotation="100 MB",
                retention="10 days",
                enqueue=True,
                backtrace=False,
                diagnose=False,
            )

        return loguru_logger


loggin = Loggin()
logger = loggin.setup_logger()
