import logging
import logging.config
import os
from pathlib import Path

REPO_DIR = Path(__file__).resolve().parent.parent
LOGGER_NAME = "tablesnap"


def configure_logging(conf_path: Path | None = None) -> logging.Logger:
    """Configure the `tablesnap` logger from logging.conf, or basicConfig without one.

    `TABLESNAP_LOG_CONFIG` points at another config file; `TABLESNAP_LOG_LEVEL`
    overrides the level of the project logger after the file is applied.
    """
    env_conf = os.getenv("TABLESNAP_LOG_CONFIG", "").strip()
    log_conf_path = conf_path or (Path(env_conf) if env_conf else REPO_DIR / "logging.conf")

    if log_conf_path.exists():
        log_dir = REPO_DIR / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        logging.config.fileConfig(
            log_conf_path,
            disable_existing_loggers=False,
            defaults={"logdirpath": str(log_dir)},
        )
    else:
        logging.basicConfig(level=logging.INFO)

    app_logger = logging.getLogger(LOGGER_NAME)
    level_name = os.getenv("TABLESNAP_LOG_LEVEL", "").strip().upper()
    if level_name:
        level = logging.getLevelName(level_name)
        if isinstance(level, int):
            app_logger.setLevel(level)
        else:
            app_logger.warning("Ignoring unknown TABLESNAP_LOG_LEVEL=%s", level_name)
    return app_logger


logger = configure_logging()
