"""
中央日志配置

入口（CLI / API）调用 configure_logging，库代码直接使用 loguru 的 logger
"""

import sys
from pathlib import Path

from loguru import logger

# 路径常量
PROJECT_ROOT = Path(__file__).parent.parent
RUNTIME_LOGS_DIR = PROJECT_ROOT / "logs"


def configure_logging(level: str = "INFO", log_dir: Path | None = None) -> None:
    """配置 logger

    Args:
        level: 终端输出级别
        log_dir: 文件日志目录，None 表示不写文件
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "app.log",
            rotation="10 MB",
            retention="7 days",
            level="DEBUG",
        )


__all__ = ["logger", "configure_logging", "RUNTIME_LOGS_DIR"]
