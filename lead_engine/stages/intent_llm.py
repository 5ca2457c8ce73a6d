"""
Intent Classification
=====================
AI buying-intent classification of a lead against the active offer.

The model is asked for a single word (High, Medium or Low) which maps to a
bounded AI score. Any failure to get a usable answer (no client, network
error, empty response, timeout) degrades to a fixed neutral result so that
scoring always completes.
"""

import asyncio
import logging
from typing import Any, Optional

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from ..errors import ClassifierError
from ..models.schemas import (
    Lead,
    Offer,
    IntentLabel,
    IntentResult,
    IntentClassified,
    ClassificationFailed,
    ClassificationOutcome,
)
from ..config.settings import (
    LLM_CONFIG,
    INTENT_MAPPING,
    FALLBACK_INTENT,
    PROVIDER_API_KEY_ENV,
    provider_api_key,
    provider_model,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a B2B sales analyst. You classify a prospect's buying intent "
    "for a product. Answer with exactly one word: High, Medium, or Low."
)


class IntentClassificationStage:
    """
    Classify a lead's buying intent with an LLM.
    Never raises: failures become the fallback result.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Any = None,
    ):
        """
        Initialize LLM client.

        Args:
            api_key: API key for LLM provider
            provider: LLM provider ("openrouter", "openai", or "anthropic")
            model: Model name in the provider's format
            timeout: Seconds to wait for a verdict before falling back
            client: Pre-built async client; skips client construction
        """
        self.provider = provider or LLM_CONFIG.get("provider", "openrouter")
        self.api_key = api_key or provider_api_key(self.provider)
        self.model = model or provider_model(self.provider)
        self.base_url = LLM_CONFIG.get("base_url", "https://openrouter.ai/api/v1")
        self.site_url = LLM_CONFIG.get("site_url", "http://localhost:8000")
        self.app_name = LLM_CONFIG.get("app_name", "Lead Scoring Engine")
        self.timeout = timeout if timeout is not None else LLM_CONFIG.get("timeout_seconds", 15.0)
        self.client = client

        if self.client is None:
            self._initialize_client()

    def _initialize_client(self):
        """Initialize the LLM client based on provider"""
        if self.provider not in PROVIDER_API_KEY_ENV:
            logger.warning(
                "Unknown LLM provider %r; intent classification will use the fallback",
                self.provider,
            )
            return

        if not self.api_key:
            logger.info("No LLM API key configured; intent classification will use the fallback")
            return

        if self.provider == "openrouter":
            self.client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                default_headers={
                    "HTTP-Referer": self.site_url,
                    "X-Title": self.app_name,
                },
            )
        elif self.provider == "openai":
            self.client = AsyncOpenAI(api_key=self.api_key)
        elif self.provider == "anthropic":
            self.client = AsyncAnthropic(api_key=self.api_key)

    @property
    def configured(self) -> bool:
        return self.client is not None

    async def classify(self, lead: Lead, offer: Offer) -> IntentResult:
        """
        Classify a lead's buying intent.

        Args:
            lead: Lead to classify
            offer: Offer the lead is evaluated against

        Returns:
            IntentResult with points in {10, 30, 50}, or the fallback (25, Medium)
        """
        outcome = await self.classify_outcome(lead, offer)

        if isinstance(outcome, IntentClassified):
            return IntentResult(
                points=outcome.points,
                intent=outcome.intent,
                reasoning=outcome.reasoning,
            )

        logger.warning("Intent classification failed for lead %s: %s", lead.id, outcome.error)
        return self.fallback_result()

    async def classify_outcome(self, lead: Lead, offer: Offer) -> ClassificationOutcome:
        """Call the model and return either a parsed verdict or the failure"""
        try:
            if not self.client:
                raise ClassifierError("No LLM client configured")

            prompt = self._generate_prompt(lead, offer)
            response = await asyncio.wait_for(self._call_llm(prompt), timeout=self.timeout)
            return self.parse_response(response)

        except asyncio.TimeoutError:
            return ClassificationFailed(error=f"LLM call timed out after {self.timeout}s")
        except Exception as e:
            return ClassificationFailed(error=f"{type(e).__name__}: {str(e)[:200]}")

    @staticmethod
    def fallback_result() -> IntentResult:
        return IntentResult(
            points=FALLBACK_INTENT["points"],
            intent=IntentLabel(FALLBACK_INTENT["intent"]),
            reasoning=FALLBACK_INTENT["reasoning"],
            fallback=True,
        )

    @staticmethod
    def parse_response(response: Any) -> IntentClassified:
        """
        Map free-form model text to an intent.

        "high" is checked before "medium"; any other non-empty text is Low.

        Raises:
            ClassifierError: if the response is empty or not text
        """
        if not isinstance(response, str) or not response.strip():
            raise ClassifierError("Empty or non-text response from LLM")

        text = response.lower()
        if "high" in text:
            label = IntentLabel.HIGH
        elif "medium" in text:
            label = IntentLabel.MEDIUM
        else:
            label = IntentLabel.LOW

        mapping = INTENT_MAPPING[label.value]
        return IntentClassified(
            points=mapping["points"],
            intent=label,
            reasoning=mapping["reasoning"],
        )

    def _generate_prompt(self, lead: Lead, offer: Offer) -> str:
        """Generate the classification prompt"""
        value_props = ", ".join(offer.value_props) if offer.value_props else "N/A"
        use_cases = ", ".join(offer.ideal_use_cases) if offer.ideal_use_cases else "N/A"

        return f"""Classify the buying intent of this prospect for the product below.

PRODUCT:
- Name: {offer.name}
- Value Propositions: {value_props}
- Ideal Use Cases: {use_cases}

PROSPECT:
- Name: {lead.name or 'Unknown'}
- Role: {lead.role or 'Unknown'}
- Company: {lead.company or 'Unknown'}
- Industry: {lead.industry or 'Unknown'}
- Location: {lead.location or 'Unknown'}
- LinkedIn Bio: {(lead.linkedin_bio or 'N/A')[:500]}

Answer with exactly one word: High, Medium, or Low."""

    async def _call_llm(self, prompt: str) -> str:
        """Call the LLM API"""
        if self.provider in ["openrouter", "openai"]:
            # Both OpenRouter and OpenAI use the same SDK interface
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=LLM_CONFIG.get("temperature", 0.0),
                max_tokens=LLM_CONFIG.get("max_tokens", 10),
            )
            return response.choices[0].message.content

        elif self.provider == "anthropic":
            response = await self.client.messages.create(
                model=self.model,
                system=SYSTEM_PROMPT,
                temperature=LLM_CONFIG.get("temperature", 0.0),
                max_tokens=LLM_CONFIG.get("max_tokens", 10),
                messages=[
                    {"role": "user", "content": prompt}
                ],
            )
            return response.content[0].text

        raise ValueError(f"Unknown provider: {self.provider}")
