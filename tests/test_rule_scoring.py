"""
Tests for the rule scoring stage

Includes:
- Role relevance (decision-maker vs influencer, token substring matching)
- Industry match (ideal vs adjacent)
- Completeness bonus and the bio-length boundary
- Keyword configuration
"""

import pytest

from lead_engine.models.rule_config import (
    RuleConfig,
    KeywordTier,
    create_default_rule_config,
)
from lead_engine.models.schemas import Lead
from lead_engine.stages.rule_scoring import RuleScoringStage

from conftest import SAMPLE_VP_LEAD, BIO_60


@pytest.fixture
def scorer() -> RuleScoringStage:
    return RuleScoringStage()


# ============================================================================
# Role relevance
# ============================================================================

@pytest.mark.parametrize("role", [
    "CEO",
    "Director of Engineering",
    "Engineering Manager",
    "VP of Sales",
    "Head of Growth",
    "co-founder & cto",
])
def test_decision_maker_roles_score_20(scorer, role):
    assert scorer.breakdown({"role": role})["role"] == 20


@pytest.mark.parametrize("role", [
    "Senior Engineer",
    "Team Lead",
    "Principal Consultant",
    "Solutions Architect",
])
def test_influencer_roles_score_10(scorer, role):
    assert scorer.breakdown({"role": role})["role"] == 10


def test_decision_maker_overrides_influencer(scorer):
    assert scorer.breakdown({"role": "Senior Director"})["role"] == 20
    assert scorer.breakdown({"role": "Lead Product Manager"})["role"] == 20


def test_role_keyword_matches_inside_token(scorer):
    # "vp" inside "svp", "head" inside "headhunter"
    assert scorer.breakdown({"role": "SVP"})["role"] == 20
    assert scorer.breakdown({"role": "Headhunter"})["role"] == 20


def test_role_without_keywords_scores_0(scorer):
    assert scorer.breakdown({"role": "Software Engineer"})["role"] == 0
    assert scorer.breakdown({"role": ""})["role"] == 0
    assert scorer.breakdown({"role": "   "})["role"] == 0


# ============================================================================
# Industry match
# ============================================================================

@pytest.mark.parametrize("industry,expected", [
    ("SaaS", 20),
    ("B2B Software", 20),
    ("FinTech", 20),
    ("Startup", 20),
    ("Management Consulting", 10),
    ("Digital Marketing", 10),
    ("Analytics", 10),
    ("Construction", 0),
    ("", 0),
])
def test_industry_tiers(scorer, industry, expected):
    assert scorer.breakdown({"industry": industry})["industry"] == expected


def test_ideal_industry_wins_over_adjacent(scorer):
    assert scorer.breakdown({"industry": "Marketing Tech"})["industry"] == 20
    assert scorer.breakdown({"industry": "SaaS analytics consulting"})["industry"] == 20


# ============================================================================
# Completeness
# ============================================================================

def test_complete_profile_with_long_bio_scores_10(scorer):
    assert scorer.breakdown(SAMPLE_VP_LEAD)["completeness"] == 10


def test_bio_length_boundary(scorer):
    lead_50 = {**SAMPLE_VP_LEAD, "linkedin_bio": "b" * 50}
    lead_51 = {**SAMPLE_VP_LEAD, "linkedin_bio": "b" * 51}
    assert scorer.breakdown(lead_50)["completeness"] == 0
    assert scorer.breakdown(lead_51)["completeness"] == 10


@pytest.mark.parametrize("field", ["name", "role", "company", "industry", "location", "linkedin_bio"])
def test_any_empty_field_forces_zero_completeness(scorer, field):
    lead = {**SAMPLE_VP_LEAD, field: ""}
    assert scorer.breakdown(lead)["completeness"] == 0


# ============================================================================
# Totals and robustness
# ============================================================================

def test_vp_saas_lead_scores_full_50(scorer):
    assert len(BIO_60) == 60
    assert scorer.score(Lead(**SAMPLE_VP_LEAD)) == 50


def test_non_string_and_missing_fields_are_empty(scorer):
    assert scorer.score({"role": 42, "industry": None}) == 0
    assert scorer.score({}) == 0
    assert scorer.score(Lead()) == 0


def test_score_is_deterministic_and_bounded(scorer):
    leads = [
        SAMPLE_VP_LEAD,
        {"role": "Senior Consultant", "industry": "consulting"},
        {"role": "intern", "industry": "retail"},
    ]
    for lead in leads:
        first = scorer.score(lead)
        assert first == scorer.score(lead)
        assert 0 <= first <= 50


# ============================================================================
# Configuration
# ============================================================================

def test_default_config_tiers():
    config = create_default_rule_config()
    assert [t.name for t in config.role_tiers] == ["decision_maker", "influencer"]
    assert [t.name for t in config.industry_tiers] == ["ideal", "adjacent"]
    assert "manager" in config.tier("role", "decision_maker").keywords
    assert config.tier("industry", "unknown") is None


def test_extra_keywords_extend_tiers():
    config = create_default_rule_config(
        extra_role_keywords={"decision_maker": ["Founder"]},
        extra_industry_keywords={"adjacent": ["FinServ"]},
    )
    scorer = RuleScoringStage(config)
    assert scorer.breakdown({"role": "Founder"})["role"] == 20
    assert scorer.breakdown({"industry": "finserv"})["industry"] == 10


def test_unknown_tier_name_is_rejected():
    with pytest.raises(ValueError):
        create_default_rule_config(extra_role_keywords={"owner": ["owner"]})


def test_tier_points_are_capped():
    config = RuleConfig(
        role_tiers=[KeywordTier(name="exec", keywords=["Chief"], points=99)],
        industry_tiers=[KeywordTier(name="any", keywords=["retail"], points=35)],
    )
    scorer = RuleScoringStage(config)
    assert scorer.breakdown({"role": "Chief Revenue Officer"})["role"] == 20
    assert scorer.breakdown({"industry": "Retail"})["industry"] == 20
