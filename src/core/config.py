"""Configuration models and YAML loader for the ranking engine."""

import math
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator


class ScoringConfig(BaseModel):
    """Signal weights and the soft minimum-rating penalty."""

    keyword_weight: float = Field(default=0.30, ge=0.0, le=1.0)
    price_weight: float = Field(default=0.15, ge=0.0, le=1.0)
    quality_weight: float = Field(default=0.30, ge=0.0, le=1.0)
    distance_weight: float = Field(default=0.15, ge=0.0, le=1.0)
    open_weight: float = Field(default=0.10, ge=0.0, le=1.0)
    rating_penalty: float = Field(default=0.6, gt=0.0, le=1.0)

    @model_validator(mode="after")
    def weights_sum_to_one(self) -> "ScoringConfig":
        total = (
            self.keyword_weight
            + self.price_weight
            + self.quality_weight
            + self.distance_weight
            + self.open_weight
        )
        if not math.isclose(total, 1.0, abs_tol=1e-6):
            msg = f"signal weights must sum to 1.0, got {total:.4f}"
            raise ValueError(msg)
        return self


class RankingConfig(BaseModel):
    """Defaults for ranking calls that do not specify them."""

    default_top_k: int = Field(default=10, ge=1)
    score_precision: int = Field(default=4, ge=0, le=10)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
