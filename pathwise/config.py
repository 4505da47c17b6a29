"""Engine configuration — scheduling constants with environment overrides."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """Constants used by the duration rule and the critical path calculator."""

    hours_per_day: float = Field(default=8.0, gt=0, description="Working hours converted to one day")
    default_duration_days: int = Field(default=1, ge=1, description="Duration of an unscheduled task")
    slack_tolerance: float = Field(default=0.001, ge=0, description="Slack below this counts as zero")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from PATHWISE_* environment variables (and a .env file)."""
        load_dotenv()
        values = {}
        if os.getenv("PATHWISE_HOURS_PER_DAY"):
            values["hours_per_day"] = os.getenv("PATHWISE_HOURS_PER_DAY")
        if os.getenv("PATHWISE_DEFAULT_DURATION_DAYS"):
            values["default_duration_days"] = os.getenv("PATHWISE_DEFAULT_DURATION_DAYS")
        if os.getenv("PATHWISE_SLACK_TOLERANCE"):
            values["slack_tolerance"] = os.getenv("PATHWISE_SLACK_TOLERANCE")
        return cls(**values)
