import logging
import logging.config
import re
from pathlib import Path
from typing import Optional, Union

# Regex để bắt các ANSI escape code (màu, bold, v.v.)
ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class StripAnsiFilter(logging.Filter):
    """Filter dùng để xoá mã màu ANSI khỏi log record (phù hợp cho file log)."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if isinstance(record.msg, str):
            record.msg = ANSI_ESCAPE_RE.sub("", record.msg)
        return True


def attach_strip_ansi_to_file_handlers() -> None:
    """Gắn StripAnsiFilter vào tất cả FileHandler của root logger."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            handler.addFilter(StripAnsiFilter())


def configure_logging(config_path: Union[str, Path], level: Optional[str] = None) -> bool:
    """
    Cấu hình logging từ file .ini, nếu không có thì dùng basicConfig.

    Trả về True nếu đã đọc được file cấu hình.
    """
    config_path = Path(config_path)
    if config_path.exists():
        logging.config.fileConfig(config_path, disable_existing_loggers=False)
        attach_strip_ansi_to_file_handlers()
        if level:
            logging.getLogger().setLevel(level.upper())
        return True

    logging.basicConfig(
        level=(level or "INFO").upper(),
        format=DEFAULT_LOG_FORMAT,
        datefmt=DEFAULT_DATE_FORMAT,
    )
    return False
