"""
Shared fixtures for the lead scoring tests.
"""

from types import SimpleNamespace
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from lead_engine.models.schemas import Offer, Lead, LeadProfile
from lead_engine.stages.intent_llm import IntentClassificationStage
from lead_engine.storage import InMemoryLeadStore


# ============================================================================
# Sample data
# ============================================================================

BIO_60 = "Leads revenue teams at B2B SaaS companies across North America."[:60]

SAMPLE_VP_LEAD = {
    "name": "Ava Patel",
    "role": "VP of Sales",
    "company": "FlowMetrics",
    "industry": "SaaS",
    "location": "Austin, TX",
    "linkedin_bio": BIO_60,
}

SAMPLE_ENGINEER_LEAD = {
    "name": "Ben Ortiz",
    "role": "Software Engineer",
    "company": "Brickworks",
    "industry": "Construction",
    "location": "Denver, CO",
    "linkedin_bio": "",
}


def make_chat_response(text: Optional[str]) -> SimpleNamespace:
    """Shape of an OpenAI chat completion, as far as the classifier reads it"""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))]
    )


def make_openai_client(text: Optional[str] = None, error: Optional[Exception] = None) -> MagicMock:
    client = MagicMock()
    if error is not None:
        client.chat.completions.create = AsyncMock(side_effect=error)
    else:
        client.chat.completions.create = AsyncMock(return_value=make_chat_response(text))
    return client


def make_classifier(text: Optional[str] = None, error: Optional[Exception] = None, **kwargs) -> IntentClassificationStage:
    return IntentClassificationStage(
        provider="openai",
        model="gpt-4o-mini",
        client=make_openai_client(text, error),
        **kwargs,
    )


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def offer() -> Offer:
    return Offer(name="Acme", value_props=["fast"], ideal_use_cases=["sales teams"])


@pytest.fixture
def vp_lead() -> Lead:
    return Lead(id=1, **SAMPLE_VP_LEAD)


@pytest.fixture
def store() -> InMemoryLeadStore:
    return InMemoryLeadStore()


@pytest.fixture
def seeded_store(store, offer) -> InMemoryLeadStore:
    store.save_offer(offer)
    store.add_leads([LeadProfile(**SAMPLE_VP_LEAD), LeadProfile(**SAMPLE_ENGINEER_LEAD)])
    return store
