"""Validated configuration for the cribbage engine and its front ends."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import yaml
from pydantic import BaseModel, Field, field_validator

from .cards import Card, card_label, parse_card
from .strategy import DEFAULT_DISCARD_STARTERS, DEFAULT_JITTER

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AIConfig(BaseModel):
    discard_starters: list[str] = Field(
        default_factory=lambda: [card_label(card) for card in DEFAULT_DISCARD_STARTERS],
        description="Starter cards averaged over when valuing a discard.",
    )
    tie_break_jitter: float = Field(
        DEFAULT_JITTER,
        ge=0,
        description="Upper bound of the random bonus added to each pegging candidate.",
    )

    @field_validator("discard_starters")
    @classmethod
    def validate_starters(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("At least one sample starter is required.")
        cards = [parse_card(label) for label in value]
        if len(set(cards)) != len(cards):
            raise ValueError("Sample starters must be distinct cards.")
        return [card_label(card) for card in cards]

    def starter_cards(self) -> Tuple[Card, ...]:
        return tuple(parse_card(label) for label in self.discard_starters)


class PacingConfig(BaseModel):
    enable_thinking_delay: bool = Field(False, description="Pause before revealing each computer move.")
    thinking_delay_seconds: float = Field(0.7, ge=0, description="Length of the cosmetic pause.")


class LoggingConfig(BaseModel):
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}")
        return normalized


class CribbageConfig(BaseModel):
    seed: Optional[int] = Field(None, description="Seed for shuffles, cuts and AI jitter; random when unset.")
    ai: AIConfig = Field(default_factory=AIConfig)
    pacing: PacingConfig = Field(default_factory=PacingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: Path | str | None = None) -> CribbageConfig:
    """Load configuration from a YAML file, falling back to defaults."""
    if path is None:
        return CribbageConfig()

    config_path = Path(path)
    if not config_path.exists():
        return CribbageConfig()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return CribbageConfig(**data) if data else CribbageConfig()
