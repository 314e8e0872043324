"""Loguru setup for the filterz command line."""

import sys
from typing import Optional

from loguru import logger


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <blue>{elapsed}</blue> | "
    "<level>{level.icon} {level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {elapsed} | {level.icon} {level: <8} | "
    "{name}:{function}:{line} - {message}"
)


def setup_logger(level: str = "WARNING", log_file: Optional[str] = None, console_output: bool = True):
    """配置 Loguru 日志系统

    Args:
        level: Console log level
        log_file: Optional file that receives DEBUG and above
        console_output: Whether to log to stderr at all

    Returns:
        tuple: (logger, config_info)
    """
    # 清除默认处理器
    logger.remove()

    if console_output:
        logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT)

    if log_file:
        logger.add(
            log_file,
            level="DEBUG",
            rotation="10 MB",
            retention="30 days",
            compression="zip",
            encoding="utf-8",
            format=FILE_FORMAT,
        )

    logger.enable("filterz")

    config_info = {
        "level": level.upper(),
        "log_file": log_file,
    }
    logger.debug(f"日志系统已初始化: {config_info}")
    return logger, config_info
