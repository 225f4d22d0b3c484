"""Settings for the code blocks, read from ``COOP_SCHEDULING_*`` environment variables."""

import os
from typing import Literal

import pydantic

from coop_scheduling.clock import Clock, MonotonicClock, VirtualClock

ENV_PREFIX = "COOP_SCHEDULING"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


class Settings(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    # "virtual" runs every example instantly with exact timings
    clock: Literal["monotonic", "virtual"] = "monotonic"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Raises:
            pydantic.ValidationError: a variable is set to an unknown value.
        """
        values = {}
        for field in ("clock", "log_level"):
            raw = os.getenv(_k(field.upper()))
            if raw is not None and raw.strip() != "":
                values[field] = raw.strip().lower() if field == "clock" else raw.strip().upper()
        return cls(**values)

    def make_clock(self) -> Clock:
        if self.clock == "virtual":
            return VirtualClock()
        return MonotonicClock()
