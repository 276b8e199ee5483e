from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the coaching dashboard backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("COACHBOARD_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("COACHBOARD_DB_PATH") or (self.data_root / "coachboard.db")
        ).expanduser()
        self.log_level: str = (os.environ.get("COACHBOARD_LOG_LEVEL") or "INFO").upper()

        week_start = (os.environ.get("COACHBOARD_WEEK_STARTS_ON") or "sunday").strip().lower()
        if week_start not in {"sunday", "monday"}:
            week_start = "sunday"
        self.week_starts_on: str = week_start

        # Unresolved template ids are shown truncated to this many characters.
        self.template_id_truncate: int = int(
            os.environ.get("COACHBOARD_TEMPLATE_ID_TRUNCATE") or "20"
        )

        self.host: str = os.environ.get("COACHBOARD_HOST") or "127.0.0.1"
        self.port: int = int(os.environ.get("COACHBOARD_PORT") or "8000")

        cors = os.environ.get("COACHBOARD_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()


def configure_logging() -> None:
    level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
