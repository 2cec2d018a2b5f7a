"""Profile model: the caller's ranking preferences."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.core.schemas import Budget, PriceCategory
from src.pipeline.pricing import level_of


class Profile(BaseModel):
    """Preferences used to score candidates.

    Price levels may be given as ordinals (0-4) or as category names such as
    ``"PRICE_LEVEL_MODERATE"``; names are converted and unknown ones dropped.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    keywords: list[str] = Field(default_factory=list)
    price_levels: list[int] = Field(default_factory=list)
    min_rating: float = Field(default=0.0, ge=0.0)
    require_open: bool = False
    max_distance_km: float = Field(default=3.0, gt=0.0)
    max_budget: Budget | None = None

    @field_validator("keywords", mode="before")
    @classmethod
    def keywords_as_strings(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list | tuple | set):
            return [str(kw) for kw in v]
        return v

    @field_validator("price_levels", mode="before")
    @classmethod
    def price_names_to_levels(cls, v: Any) -> Any:
        if v is None:
            return []
        if not isinstance(v, list | tuple | set):
            return v
        levels: list[Any] = []
        for item in v:
            if isinstance(item, str | PriceCategory):
                level = level_of(item)
                if level is not None:
                    levels.append(level)
            else:
                levels.append(item)
        return levels

    @field_validator("price_levels")
    @classmethod
    def levels_in_range(cls, v: list[int]) -> list[int]:
        bad = [lv for lv in v if not 0 <= lv <= 4]
        if bad:
            msg = f"price levels must be between 0 and 4, got {bad}"
            raise ValueError(msg)
        return v

    def has_preferences(self) -> bool:
        """True when at least one preference narrows the ranking."""
        return bool(
            self.keywords
            or self.price_levels
            or self.min_rating > 0
            or self.max_budget is not None
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Profile":
        """Load a profile from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Profile file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
