"""Runtime settings, read from OHM_* environment variables."""

import os
from pathlib import Path

from pydantic import BaseModel

BUNDLED_SPEC_PATH = Path(__file__).parent / "openapi" / "api.yaml"
DEFAULT_PAGE_SIZE = 20
DEFAULT_MAX_ORDERS = 10
DEFAULT_DELETION_FLOOR = 0
DEFAULT_LOG_LEVEL = "WARNING"

ENV_PREFIX = "OHM_"


class Settings(BaseModel):
    spec_path: Path = BUNDLED_SPEC_PATH
    default_page_size: int = DEFAULT_PAGE_SIZE
    max_orders: int = DEFAULT_MAX_ORDERS  # per customer
    deletion_floor: int = DEFAULT_DELETION_FLOOR  # ids at or below it cannot be deleted
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: dict | None = None) -> "Settings":
        """Build settings from the environment, falling back to defaults."""
        environ = os.environ if environ is None else environ
        fields = {
            "spec_path": "SPEC_PATH",
            "default_page_size": "PAGE_SIZE",
            "max_orders": "MAX_ORDERS",
            "deletion_floor": "DELETION_FLOOR",
            "log_level": "LOG_LEVEL",
        }
        values = {}
        for field, suffix in fields.items():
            value = environ.get(ENV_PREFIX + suffix)
            if value:
                values[field] = value
        return cls(**values)
