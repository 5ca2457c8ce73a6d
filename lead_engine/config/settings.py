"""
Configuration settings for the Lead Scoring Engine
"""

import os

# =============================================================================
# LLM CONFIGURATION (OpenRouter)
# =============================================================================

PROVIDER_API_KEY_ENV = {
    "openrouter": "OPENROUTER_API_KEY",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}

PROVIDER_DEFAULT_MODELS = {
    "openrouter": "openai/gpt-4o-mini",  # OpenRouter model format
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-haiku-latest",
}


def provider_api_key(provider: str) -> str:
    """API key for a provider, read from that provider's own variable"""
    env_name = PROVIDER_API_KEY_ENV.get(provider)
    return os.getenv(env_name, "") if env_name else ""


def provider_model(provider: str) -> str:
    """LLM_MODEL if set, else the provider's default model"""
    return os.getenv("LLM_MODEL") or PROVIDER_DEFAULT_MODELS.get(provider, "")


_PROVIDER = os.getenv("LLM_PROVIDER", "openrouter")  # openrouter, openai, anthropic

LLM_CONFIG = {
    "provider": _PROVIDER,
    "model": provider_model(_PROVIDER),
    "api_key": provider_api_key(_PROVIDER),
    "base_url": os.getenv("LLM_BASE_URL", "https://openrouter.ai/api/v1"),
    "max_tokens": 10,
    "temperature": 0.0,
    "timeout_seconds": float(os.getenv("LLM_TIMEOUT_SECONDS", "15")),
    # OpenRouter specific headers
    "site_url": os.getenv("OPENROUTER_SITE_URL", "http://localhost:8000"),
    "app_name": os.getenv("OPENROUTER_APP_NAME", "Lead Scoring Engine"),
}

# =============================================================================
# SERVER CONFIGURATION
# =============================================================================

SERVER_CONFIG = {
    "host": os.getenv("HOST", "0.0.0.0"),
    "port": int(os.getenv("PORT", "8000")),
    "log_level": os.getenv("LOG_LEVEL", "INFO"),
}

# =============================================================================
# RULE KEYWORDS
# =============================================================================
# Tiers are evaluated in order; the first tier with a match awards its points.

DEFAULT_RULE_KEYWORDS = {
    "role": [
        {
            "name": "decision_maker",
            "keywords": ["ceo", "cto", "vp", "director", "head", "manager"],
            "points": 20,
        },
        {
            "name": "influencer",
            "keywords": ["senior", "lead", "principal", "architect"],
            "points": 10,
        },
    ],
    "industry": [
        {
            "name": "ideal",
            "keywords": ["saas", "software", "tech", "startup"],
            "points": 20,
        },
        {
            "name": "adjacent",
            "keywords": ["consulting", "marketing", "analytics"],
            "points": 10,
        },
    ],
}

COMPLETENESS_RULE = {
    "points": 10,
    "min_bio_length": 50,  # exclusive
    "required_fields": ["name", "role", "company", "industry", "location", "linkedin_bio"],
}

ROLE_MAX_POINTS = 20
INDUSTRY_MAX_POINTS = 20
COMPLETENESS_MAX_POINTS = 10

# =============================================================================
# INTENT MAPPING
# =============================================================================

INTENT_MAPPING = {
    "High": {
        "points": 50,
        "reasoning": "AI classified high buying intent based on role and profile match",
    },
    "Medium": {
        "points": 30,
        "reasoning": "AI classified medium buying intent with moderate fit",
    },
    "Low": {
        "points": 10,
        "reasoning": "AI classified low buying intent with limited relevance",
    },
}

FALLBACK_INTENT = {
    "intent": "Medium",
    "points": 25,
    "reasoning": "AI unavailable, using default score",
}
