# price_merge/config/logging_config.py

"""Logging for merge jobs.

The library only emits records through ``price_merge.*`` loggers. An
application running a merge job calls :func:`setup_logging` once per run
to get a ``merge_<timestamp>.log`` file under ``Settings.LOGS_DIR`` plus a
stderr handler. Both thresholds come from ``Settings`` (and so from
``.env``): at ``DEBUG`` the file holds one line per group resolution, at
``INFO`` only the per-call summary.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from price_merge.config.settings import Settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_level(name: str) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value.

    Raises:
        ValueError: If ``name`` is not a standard logging level.
    """
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        msg = f"Unknown log level: {name!r}"
        raise ValueError(msg)
    return level


def setup_logging(level: str | None = None) -> Path:
    """Route ``price_merge`` records to a fresh per-run log file.

    Handlers left by a previous run are closed and replaced, so every call
    starts a new file and handlers never accumulate.

    Args:
        level: File threshold overriding ``Settings.LOG_LEVEL``.

    Returns:
        The path of the log file opened for this run.
    """
    file_level = resolve_level(level or Settings.LOG_LEVEL)
    console_level = resolve_level(Settings.CONSOLE_LOG_LEVEL)

    Settings.LOGS_DIR.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = Settings.LOGS_DIR / f"merge_{stamp}.log"

    project_logger = logging.getLogger(Settings.LOGGER_NAME)
    for handler in list(project_logger.handlers):
        handler.close()
        project_logger.removeHandler(handler)
    project_logger.setLevel(min(file_level, console_level))

    formatter = logging.Formatter(_FORMAT)
    for handler, threshold in (
        (logging.FileHandler(log_file, encoding="utf-8"), file_level),
        (logging.StreamHandler(sys.stderr), console_level),
    ):
        handler.setLevel(threshold)
        handler.setFormatter(formatter)
        project_logger.addHandler(handler)

    project_logger.info(
        "Merge log opened at %s (file %s, console %s)",
        log_file,
        logging.getLevelName(file_level),
        logging.getLevelName(console_level),
    )
    return log_file
