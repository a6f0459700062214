"""日志初始化。"""

import logging

from souldiary_api.core.config import get_settings

LOGGER_NAMESPACE = "souldiary_api"


def setup_logging() -> None:
    """初始化进程级日志输出格式与级别。"""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.getLogger(LOGGER_NAMESPACE).setLevel(settings.log_level)
