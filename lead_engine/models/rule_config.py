"""
Rule Scoring Configuration Models
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from ..config.settings import (
    DEFAULT_RULE_KEYWORDS,
    COMPLETENESS_RULE,
    ROLE_MAX_POINTS,
    INDUSTRY_MAX_POINTS,
    COMPLETENESS_MAX_POINTS,
)


class KeywordTier(BaseModel):
    """A named keyword category and the points a match awards"""
    name: str
    keywords: List[str] = Field(default_factory=list)
    points: int = Field(0, ge=0)

    @field_validator("keywords")
    @classmethod
    def _lowercase(cls, value: List[str]) -> List[str]:
        return [k.strip().lower() for k in value if k and k.strip()]


class CompletenessRule(BaseModel):
    """All-or-nothing data completeness bonus"""
    points: int = Field(10, ge=0, le=COMPLETENESS_MAX_POINTS)
    min_bio_length: int = 50
    required_fields: List[str] = Field(
        default_factory=lambda: list(COMPLETENESS_RULE["required_fields"])
    )


class RuleConfig(BaseModel):
    """Keyword tiers and completeness rule for the rule scorer"""
    role_tiers: List[KeywordTier] = Field(default_factory=list)
    industry_tiers: List[KeywordTier] = Field(default_factory=list)
    completeness: CompletenessRule = Field(default_factory=CompletenessRule)

    @field_validator("role_tiers")
    @classmethod
    def _cap_role(cls, tiers: List[KeywordTier]) -> List[KeywordTier]:
        return [t.model_copy(update={"points": min(t.points, ROLE_MAX_POINTS)}) for t in tiers]

    @field_validator("industry_tiers")
    @classmethod
    def _cap_industry(cls, tiers: List[KeywordTier]) -> List[KeywordTier]:
        return [t.model_copy(update={"points": min(t.points, INDUSTRY_MAX_POINTS)}) for t in tiers]

    def tier(self, group: str, name: str) -> Optional[KeywordTier]:
        """Look up a tier by group ("role" or "industry") and name"""
        tiers = self.role_tiers if group == "role" else self.industry_tiers
        for t in tiers:
            if t.name == name:
                return t
        return None


def create_default_rule_config(
    extra_role_keywords: Optional[dict] = None,
    extra_industry_keywords: Optional[dict] = None,
) -> RuleConfig:
    """
    Factory function to create a rule config from the default keyword lists.

    Args:
        extra_role_keywords: tier name -> keywords appended to that role tier
        extra_industry_keywords: tier name -> keywords appended to that industry tier
    """
    config = RuleConfig(
        role_tiers=[KeywordTier(**t) for t in DEFAULT_RULE_KEYWORDS["role"]],
        industry_tiers=[KeywordTier(**t) for t in DEFAULT_RULE_KEYWORDS["industry"]],
        completeness=CompletenessRule(**COMPLETENESS_RULE),
    )

    for group, extras in (("role", extra_role_keywords), ("industry", extra_industry_keywords)):
        for name, keywords in (extras or {}).items():
            tier = config.tier(group, name)
            if tier is None:
                raise ValueError(f"Unknown {group} tier: {name}")
            tier.keywords.extend(k.strip().lower() for k in keywords if k and k.strip())

    return config
