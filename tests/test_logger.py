import logging

from blog_backend.utils.logger import setup_logger


def test_setup_logger_writes_daily_file(tmp_path):
    root = logging.getLogger()
    previous_handlers, previous_level = root.handlers[:], root.level
    try:
        setup_logger(log_dir=str(tmp_path), level="debug")
        logging.info("日志测试")
        assert root.level == logging.DEBUG
        log_files = list(tmp_path.glob("blog_backend_*.log"))
        assert len(log_files) == 1
        for handler in root.handlers:
            handler.flush()
        assert "日志测试" in log_files[0].read_text(encoding="utf-8")
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in previous_handlers:
            root.addHandler(handler)
        root.setLevel(previous_level)
