from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from functools import lru_cache

from dateutil import tz as dateutil_tz


@dataclass(frozen=True)
class Settings:
    app_title: str
    log_level: str
    timezone_name: str

    @property
    def tz(self) -> tzinfo:
        """Zone whose calendar days and wall-clock hours define the grid."""
        return dateutil_tz.gettz(self.timezone_name) or timezone.utc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        app_title=os.getenv("WEEKGRID_APP_TITLE", "Week Grid Layout Service"),
        log_level=os.getenv("WEEKGRID_LOG_LEVEL", "INFO"),
        timezone_name=os.getenv("WEEKGRID_TIMEZONE", "UTC"),
    )
