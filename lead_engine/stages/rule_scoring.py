"""
Rule Scoring
============
Deterministic, keyword-driven scoring of a lead's profile (0-50).

Sub-scores:
- Role relevance (0-20): decision-maker beats influencer
- Industry match (0-20): ideal beats adjacent
- Completeness (0-10): all fields present and a substantial LinkedIn bio
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union

from ..models.schemas import Lead
from ..models.rule_config import RuleConfig, KeywordTier, create_default_rule_config


class RuleScoringStage:
    """
    Score a lead from its profile fields alone. Pure and total: no I/O,
    and missing or non-string fields count as empty.
    """

    def __init__(self, config: Optional[RuleConfig] = None):
        self.config = config or create_default_rule_config()

    def score(self, lead: Union[Lead, Mapping]) -> int:
        """Return the rule score in [0, 50]"""
        return sum(self.breakdown(lead).values())

    def breakdown(self, lead: Union[Lead, Mapping]) -> Dict[str, int]:
        """Return the three sub-scores keyed by "role", "industry", "completeness" """
        return {
            "role": self._score_role(self._field(lead, "role")),
            "industry": self._score_industry(self._field(lead, "industry")),
            "completeness": self._score_completeness(lead),
        }

    def _score_role(self, role: str) -> int:
        """Award the first role tier whose keyword appears inside any role token"""
        tokens = role.lower().split()
        if not tokens:
            return 0
        for tier in self.config.role_tiers:
            if any(self._contains_any(token, tier) for token in tokens):
                return tier.points
        return 0

    def _score_industry(self, industry: str) -> int:
        """Award the first industry tier whose keyword appears in the industry"""
        industry = industry.lower()
        if not industry:
            return 0
        for tier in self.config.industry_tiers:
            if self._contains_any(industry, tier):
                return tier.points
        return 0

    def _score_completeness(self, lead: Union[Lead, Mapping]) -> int:
        rule = self.config.completeness
        values: List[str] = [self._field(lead, f) for f in rule.required_fields]
        if not all(values):
            return 0
        if len(self._field(lead, "linkedin_bio")) <= rule.min_bio_length:
            return 0
        return rule.points

    @staticmethod
    def _contains_any(text: str, tier: KeywordTier) -> bool:
        return any(keyword in text for keyword in tier.keywords)

    @staticmethod
    def _field(lead: Union[Lead, Mapping], name: str) -> str:
        if isinstance(lead, Mapping):
            value: Any = lead.get(name)
        else:
            value = getattr(lead, name, None)
        return value if isinstance(value, str) else ""
