# price_merge/config/settings.py

"""Central configuration for the price_merge engine."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the price_merge engine."""

    # --- Timestamps ---
    # Format of raw timestamps accepted by Price.of (dd.mm.yyyy hh:mm:ss)
    TIMESTAMP_FORMAT: str = os.getenv(
        "PRICE_MERGE_TIMESTAMP_FORMAT", "%d.%m.%Y %H:%M:%S"
    )

    # --- Logging ---
    LOGGER_NAME: str = "price_merge"
    # Threshold of the per-run merge log; DEBUG records every group resolution
    LOG_LEVEL: str = os.getenv("PRICE_MERGE_LOG_LEVEL", "DEBUG")
    CONSOLE_LOG_LEVEL: str = os.getenv(
        "PRICE_MERGE_CONSOLE_LOG_LEVEL", "WARNING"
    )

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = Path(
        os.getenv("PRICE_MERGE_LOGS_DIR", str(BASE_DIR / "logs"))
    )
