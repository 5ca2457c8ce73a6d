"""
Pydantic schemas for the Lead Scoring Engine
"""

from enum import Enum
from typing import List, Optional, Union, Literal
from pydantic import BaseModel, Field, field_validator
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS
# =============================================================================

class IntentLabel(str, Enum):
    """Buying intent label attached to the AI score"""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


# =============================================================================
# INPUT SCHEMAS
# =============================================================================

class Offer(BaseModel):
    """Product/offer description used as the basis for AI classification"""
    id: Optional[int] = None
    name: str
    value_props: List[str] = Field(default_factory=list)
    ideal_use_cases: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)

    class Config:
        frozen = True


class LeadProfile(BaseModel):
    """Profile fields of a prospective customer"""
    name: Optional[str] = ""
    role: Optional[str] = ""
    company: Optional[str] = ""
    industry: Optional[str] = ""
    location: Optional[str] = ""
    linkedin_bio: Optional[str] = ""

    @field_validator(
        "name", "role", "company", "industry", "location", "linkedin_bio",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Ava Patel",
                "role": "Head of Growth",
                "company": "FlowMetrics",
                "industry": "B2B SaaS mid-market",
                "location": "Austin, TX",
                "linkedin_bio": "Scaling growth teams at B2B SaaS companies for 8+ years.",
            }
        }


class Lead(LeadProfile):
    """A stored lead with its scoring fields"""
    id: Optional[int] = None
    rule_score: int = Field(0, ge=0, le=50)
    ai_score: int = Field(0, ge=0, le=50)
    final_score: int = Field(0, ge=0, le=100)
    intent: Optional[IntentLabel] = None
    reasoning: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)


# =============================================================================
# CLASSIFICATION SCHEMAS
# =============================================================================

class IntentResult(BaseModel):
    """Bounded AI score, label and reasoning for one lead"""
    points: int
    intent: IntentLabel
    reasoning: str
    fallback: bool = False


class IntentClassified(IntentResult):
    """The model answered and the answer was parsed"""
    status: Literal["success"] = "success"


class ClassificationFailed(BaseModel):
    """The model call failed; the fallback result applies"""
    status: Literal["failed"] = "failed"
    error: str


ClassificationOutcome = Union[IntentClassified, ClassificationFailed]


# =============================================================================
# OUTPUT SCHEMAS
# =============================================================================

class ScoreResult(BaseModel):
    """Caller-facing projection of a scored lead"""
    lead_id: Optional[int] = None
    name: str = ""
    role: str = ""
    company: str = ""
    industry: str = ""
    rule_score: int
    ai_score: int
    final_score: int
    intent: IntentLabel
    reasoning: str


class ScoringRunResult(BaseModel):
    """Result of one scoring run over the whole lead set"""
    leads_scored: int
    results: List[ScoreResult] = Field(default_factory=list)
    ai_fallbacks: int = 0
    processing_time_ms: float = 0


# =============================================================================
# API REQUEST SCHEMAS
# =============================================================================

class OfferRequest(BaseModel):
    """Request to save an offer"""
    name: str
    value_props: List[str] = Field(default_factory=list)
    ideal_use_cases: List[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "AI Outreach Automation",
                "value_props": ["24/7 outreach", "6x more meetings"],
                "ideal_use_cases": ["B2B SaaS mid-market"],
            }
        }
