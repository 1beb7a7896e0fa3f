import logging

from core.logger import setup_logging


def test_setup_logging_creates_rotating_log_file(tmp_path):
    log_dir = tmp_path / "logs"

    logger = setup_logging(str(log_dir), logging.DEBUG)

    assert (log_dir / "tvbrowse.log").exists()
    assert logger.name == "TVBrowse"
    assert logging.getLogger("yt_dlp").level == logging.CRITICAL
    assert logging.getLogger("urllib3").level == logging.WARNING
