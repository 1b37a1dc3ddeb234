"""Engine configuration.

Scoring weights are untuned heuristics, so they live here instead of being
literal constants in the proposer.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field


class ScoringConfig(BaseModel):
    """Weights and limits used when combining intent and value signals."""

    value_top_k: int = Field(default=12, ge=1, description="Value matches kept per query")
    exact_match_bonus: float = Field(
        default=0.25, ge=0.0, description="Added when the value text appears verbatim in the query"
    )
    intent_weight: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Weight of the intent score in filtered candidates (0.5 = plain average)",
    )
    max_direct_filters: int = Field(
        default=3, ge=0, description="Same-collection value matches turned into filters"
    )
    max_cross_matches: int = Field(
        default=4, ge=0, description="Cross-collection value matches tried for FK resolution"
    )
    max_fk_fields: int = Field(
        default=2, ge=0, description="Foreign key fields paired with each cross match"
    )

    def combine(self, intent_score: float, value_score: float) -> float:
        """Blend an intent score with an (adjusted) value score."""
        return self.intent_weight * intent_score + (1.0 - self.intent_weight) * value_score


class EngineConfig(BaseModel):
    """Configuration for index building and the engine facade."""

    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    auto_retrain: bool = Field(
        default=False, description="Rebuild the index before proposing if a mutation made it stale"
    )
    example_sample_size: int = Field(
        default=20, ge=1, description="Records scanned to collect field names per collection"
    )
    record_example_limit: int = Field(
        default=10, ge=0, description="Records turned into 'Show ... for ...' examples"
    )
    max_value_length: int = Field(
        default=120, ge=1, description="Strings must be shorter than this to be indexed"
    )
    max_number_length: int = Field(
        default=12, ge=1, description="Numbers must print within this many characters"
    )

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Build a config from NLACTION_* environment variables.

        Recognised variables:
            NLACTION_AUTO_RETRAIN: "1"/"true" to enable auto retraining
            NLACTION_EXACT_MATCH_BONUS: float
            NLACTION_INTENT_WEIGHT: float
            NLACTION_VALUE_TOP_K: int
        """
        scoring: dict[str, str] = {}
        if bonus := os.getenv("NLACTION_EXACT_MATCH_BONUS"):
            scoring["exact_match_bonus"] = bonus
        if weight := os.getenv("NLACTION_INTENT_WEIGHT"):
            scoring["intent_weight"] = weight
        if top_k := os.getenv("NLACTION_VALUE_TOP_K"):
            scoring["value_top_k"] = top_k

        auto_retrain = os.getenv("NLACTION_AUTO_RETRAIN", "").lower() in ("1", "true", "yes")
        return cls.model_validate(
            {"scoring": scoring, "auto_retrain": auto_retrain}
        )
