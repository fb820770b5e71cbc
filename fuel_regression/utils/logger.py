#!filepath: fuel_regression/utils/logger.py
import os
import sys
from loguru import logger
from typing import Optional

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"


class Logging:
    """
    Project logger (loguru wrapper)
    ---------------------------------------
    - stderr sink by default
    - optional file sink with rotation / retention
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level

        self._configure()

    def _configure(self) -> None:
        """
        Reset every loguru handler and install ours.
        """
        logger.remove()

        logger.add(sys.stderr, level=self.level, format=_FORMAT)

        if self.log_dir:
            os.makedirs(self.log_dir, exist_ok=True)
            logger.add(
                sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
                rotation=self.rotation,
                retention=self.retention,
                level=self.level,
                format=_FORMAT,
                enqueue=True,
                backtrace=True,
                diagnose=True,
            )
            logger.info(f"[Logging] file sink -> {self.log_dir}")

    # ---------- level methods ----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def reconfigure(
        self,
        *,
        log_dir: Optional[str],
        rotation: str,
        retention: str,
        log_level: str,
    ) -> None:
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level
        self._configure()


def init_logging(cfg) -> Logging:
    """
    Reconfigure the global ``logs`` from a LogConfig.
    """
    logs.reconfigure(
        log_dir=cfg.dir,
        rotation=cfg.rotation,
        retention=cfg.retention,
        log_level=cfg.level,
    )
    return logs


# default global logs (reconfigured by init_logging)
logs = Logging()
