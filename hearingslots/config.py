"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.exceptions import InvalidRequestError
from .domain.models import WorkingCalendar, WorkSession
from .domain.timefmt import parse_time
from .domain.validation import SearchLimits


class SessionConfig(BaseModel):
    """A daily session, e.g. morning 08:00-12:00."""
    name: str
    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def validate_clock(cls, v: str) -> str:
        """Validate the value is a HH:MM time."""
        try:
            parse_time(v)
        except InvalidRequestError as exc:
            raise ValueError(str(exc)) from exc
        return v

    @model_validator(mode="after")
    def validate_order(self) -> "SessionConfig":
        """Ensure the session opens before it closes."""
        if parse_time(self.end) <= parse_time(self.start):
            raise ValueError(f"Session '{self.name}': end must be later than start")
        return self

    def to_session(self) -> WorkSession:
        return WorkSession(name=self.name, start=parse_time(self.start), end=parse_time(self.end))


def _default_sessions() -> List[SessionConfig]:
    return [
        SessionConfig(name="morning", start="08:00", end="12:00"),
        SessionConfig(name="afternoon", start="13:00", end="18:00"),
    ]


class CalendarConfig(BaseModel):
    """Court calendar: daily sessions and non-working weekdays."""
    sessions: List[SessionConfig] = Field(default_factory=_default_sessions)
    exclude_days: List[int] = Field(default_factory=lambda: [5, 6])  # Saturday, Sunday

    @field_validator("exclude_days")
    @classmethod
    def validate_exclude_days(cls, value: List[int]) -> List[int]:
        """Ensure weekdays are in valid range and deduplicated."""
        invalid_days = [day for day in value if day not in range(7)]
        if invalid_days:
            raise ValueError(f"exclude_days must be between 0 and 6, got {invalid_days}")
        # Preserve order while removing duplicates
        seen: set[int] = set()
        deduped: List[int] = []
        for day in value:
            if day not in seen:
                deduped.append(day)
                seen.add(day)
        return deduped

    @field_validator("sessions")
    @classmethod
    def validate_sessions(cls, value: List[SessionConfig]) -> List[SessionConfig]:
        """Ensure at least one session exists and sessions do not overlap."""
        if not value:
            raise ValueError("At least one session is required")
        ordered = sorted(value, key=lambda s: parse_time(s.start))
        for previous, current in zip(ordered, ordered[1:]):
            if parse_time(current.start) < parse_time(previous.end):
                raise ValueError(f"Sessions '{previous.name}' and '{current.name}' overlap")
        return value

    def to_calendar(self) -> WorkingCalendar:
        return WorkingCalendar(
            sessions=[s.to_session() for s in self.sessions],
            exclude_weekdays=list(self.exclude_days),
        )


class LimitsConfig(BaseModel):
    """Inclusive bounds for search parameters."""
    min_duration: int = 15
    max_duration: int = 480
    max_grid: int = 60
    max_buffer: int = 240

    @model_validator(mode="after")
    def validate_bounds(self) -> "LimitsConfig":
        if not 0 < self.min_duration <= self.max_duration:
            raise ValueError("min_duration must be positive and not above max_duration")
        if self.max_grid < 0 or self.max_buffer < 0:
            raise ValueError("max_grid and max_buffer must not be negative")
        return self

    def to_limits(self) -> SearchLimits:
        return SearchLimits(
            min_duration=self.min_duration,
            max_duration=self.max_duration,
            max_grid=self.max_grid,
            max_buffer=self.max_buffer,
        )


class SearchDefaultsConfig(BaseModel):
    """Default settings for search."""
    buffer_before_minutes: int = 10
    buffer_after_minutes: int = 10
    grid_minutes: int = 15
    min_gap_minutes: int = 5
    limits: LimitsConfig = Field(default_factory=LimitsConfig)

    @field_validator("buffer_before_minutes", "buffer_after_minutes", "grid_minutes", "min_gap_minutes")
    @classmethod
    def validate_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative")
        return value


class SourceConfig(BaseModel):
    """Where existing hearings are read from."""
    kind: Literal["json", "http"] = "json"
    path: Optional[Path] = None
    base_url: Optional[str] = None
    timeout_seconds: float = 30
    token: Optional[str] = None

    @model_validator(mode="after")
    def validate_kind(self) -> "SourceConfig":
        if self.kind == "http" and not self.base_url:
            raise ValueError("source.base_url is required when kind is 'http'")
        if self.timeout_seconds <= 0:
            raise ValueError("source.timeout_seconds must be greater than zero")
        return self


class AppConfig(BaseModel):
    """Application configuration."""
    calendar: CalendarConfig = Field(default_factory=CalendarConfig)
    search: SearchDefaultsConfig = Field(default_factory=SearchDefaultsConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)

        # Relative hearing files are resolved against the config file's folder
        if config.source.path is not None and not config.source.path.is_absolute():
            config.source.path = (config_path.parent / config.source.path).resolve()

        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
