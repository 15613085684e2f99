"""Validated table configuration for 31."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class PacingConfig(BaseModel):
    draw_pause: float = Field(1.0, ge=0, description="Seconds the bot waits after drawing before it discards.")
    discard_pause: float = Field(0.5, ge=0, description="Seconds the bot waits after discarding before ending its turn.")
    knock_pause: float = Field(0.5, ge=0, description="Seconds the bot waits after knocking.")


class TableConfig(BaseModel):
    human_player: int = Field(0, description="Seat controlled by a person.")
    bot_player: int = Field(1, description="Seat controlled by the heuristic bot.")
    starting_player: int = Field(0, description="Seat that takes the first turn of each round.")
    seed: Optional[int] = Field(None, description="Seed for reproducible shuffles.")
    reveal_dealt_hand: bool = Field(True, description="Whether the human's dealt cards are visible to the bot.")
    max_turns: int = Field(200, gt=0, description="Turn cap after which arena rounds force a knock.")
    log_level: str = Field("INFO", description="Logging level used by the entry points.")
    pacing: PacingConfig = Field(default_factory=PacingConfig)

    @field_validator("human_player", "bot_player", "starting_player")
    @classmethod
    def validate_seat(cls, value: int) -> int:
        if value not in (0, 1):
            raise ValueError(f"Seat must be 0 or 1, got {value}.")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}")
        return normalized

    @model_validator(mode="after")
    def ensure_distinct_seats(self) -> "TableConfig":
        if self.human_player == self.bot_player:
            raise ValueError("Human and bot must sit in different seats.")
        return self


def load_config(path: Optional[Union[str, Path]] = None) -> TableConfig:
    """Read a JSON config file, or return defaults when no path is given."""
    if path is None:
        return TableConfig()
    return TableConfig.model_validate_json(Path(path).read_text(encoding="utf-8"))
