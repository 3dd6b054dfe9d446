# 日志配置：控制台 + 按日期命名的日志文件
import logging
import os
from datetime import datetime

from blog_backend.config import config

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(filename)s:%(lineno)d - %(funcName)s - %(message)s'


def setup_logger(log_dir=None, level=None):
    """初始化根日志记录器，关闭 ENABLE_LOGGING 时只输出到控制台"""
    level = getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO)
    log_formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(log_formatter)
    handlers = [console_handler]

    if config.ENABLE_LOGGING:
        log_dir = log_dir or config.LOG_DIR
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, f"blog_backend_{datetime.now().strftime('%Y%m%d')}.log")
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(log_formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.info(f"日志初始化完成，级别: {logging.getLevelName(level)}")
