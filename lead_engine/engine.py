"""
Lead Scoring Engine - Main Orchestrator
=======================================
Combines the two scoring stages for every lead:
  Rule Scoring (0-50) + Intent Classification (0-50) = Final Score (0-100)

Leads are scored one at a time in source order. Each lead's five scoring
fields are written back through the store in a single update before the
next lead starts.
"""

import logging
import time
from typing import Optional, List, Dict, Any, Sequence

from .errors import NoOfferError, NoLeadsError, PersistenceError
from .models.schemas import Offer, Lead, ScoreResult, ScoringRunResult
from .models.rule_config import RuleConfig
from .stages.rule_scoring import RuleScoringStage
from .stages.intent_llm import IntentClassificationStage
from .storage import LeadStore

logger = logging.getLogger(__name__)


class LeadScoringPipeline:
    """
    Main pipeline that scores every lead against the active offer.
    """

    def __init__(
        self,
        store: LeadStore,
        rule_config: Optional[RuleConfig] = None,
        classifier: Optional[IntentClassificationStage] = None,
    ):
        """
        Initialize the scoring pipeline.

        Args:
            store: Source of the offer and leads, and sink for score updates
            rule_config: Keyword configuration (uses defaults if not provided)
            classifier: Intent classifier (built from LLM_CONFIG if not provided)
        """
        self.store = store
        self.rule_scorer = RuleScoringStage(rule_config)
        self.classifier = classifier or IntentClassificationStage()

        self.stats = self._empty_stats()

    async def run_scoring(self) -> ScoringRunResult:
        """
        Score every stored lead against the latest offer.

        Raises:
            NoOfferError: no offer has been saved
            NoLeadsError: there are no leads
            PersistenceError: a score update failed mid-run
        """
        offer = self.store.get_latest_offer()
        if offer is None:
            raise NoOfferError()
        return await self.run(offer, self.store.get_all_leads())

    async def run(self, offer: Optional[Offer], leads: Sequence[Lead]) -> ScoringRunResult:
        """
        Score the given leads against an offer and persist each result.

        Args:
            offer: Offer to classify against
            leads: Leads to score, in processing order

        Returns:
            ScoringRunResult with one ScoreResult per lead
        """
        if offer is None:
            raise NoOfferError()
        if not leads:
            raise NoLeadsError()

        start_time = time.time()
        self.stats["total_runs"] += 1
        logger.info("Scoring %d leads against offer %r", len(leads), offer.name)

        results: List[ScoreResult] = []
        fallbacks = 0

        for lead in leads:
            rule = self.rule_scorer.score(lead)
            ai = await self.classifier.classify(lead, offer)
            if ai.fallback:
                fallbacks += 1
            final = rule + ai.points

            error = "store rejected the update"
            try:
                written = self.store.update_lead_scores(
                    lead.id, rule, ai.points, final, ai.intent, ai.reasoning
                )
            except Exception as e:
                written = False
                error = f"{type(e).__name__}: {e}"

            if not written:
                self._record_failure(results, fallbacks)
                logger.error(
                    "Scoring aborted at lead %s after %d leads: %s",
                    lead.id, len(results), error,
                )
                raise PersistenceError(
                    f"Failed to save scores for lead {lead.id}: {error}",
                    lead_id=lead.id,
                    leads_scored=len(results),
                    results=results,
                )

            logger.debug(
                "Lead %s scored: rule=%d ai=%d final=%d intent=%s",
                lead.id, rule, ai.points, final, ai.intent.value,
            )
            results.append(self._to_result(lead, rule, ai.points, final, ai.intent, ai.reasoning))

        total_time = (time.time() - start_time) * 1000
        self.stats["leads_scored"] += len(results)
        self.stats["ai_fallbacks"] += fallbacks
        self.stats["total_processing_time_ms"] += total_time

        logger.info(
            "Scored %d leads in %.1f ms (%d AI fallbacks)",
            len(results), total_time, fallbacks,
        )

        return ScoringRunResult(
            leads_scored=len(results),
            results=results,
            ai_fallbacks=fallbacks,
            processing_time_ms=round(total_time, 2),
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get pipeline statistics"""
        stats = self.stats.copy()
        if stats["leads_scored"] > 0:
            stats["ai_fallback_rate"] = round(
                stats["ai_fallbacks"] / stats["leads_scored"] * 100, 1
            )
            stats["avg_processing_time_ms"] = round(
                stats["total_processing_time_ms"] / stats["leads_scored"], 2
            )
        stats["llm_configured"] = self.classifier.configured
        return stats

    def reset_stats(self):
        """Reset pipeline statistics"""
        self.stats = self._empty_stats()

    # =========================================================================
    # Helper Methods
    # =========================================================================

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "total_runs": 0,
            "failed_runs": 0,
            "leads_scored": 0,
            "ai_fallbacks": 0,
            "total_processing_time_ms": 0,
        }

    def _record_failure(self, results: List[ScoreResult], fallbacks: int):
        self.stats["failed_runs"] += 1
        self.stats["leads_scored"] += len(results)
        self.stats["ai_fallbacks"] += fallbacks

    @staticmethod
    def _to_result(lead: Lead, rule: int, ai_points: int, final: int, intent, reasoning: str) -> ScoreResult:
        """Project a scored lead into the caller-facing result"""
        return ScoreResult(
            lead_id=lead.id,
            name=lead.name or "",
            role=lead.role or "",
            company=lead.company or "",
            industry=lead.industry or "",
            rule_score=rule,
            ai_score=ai_points,
            final_score=final,
            intent=intent,
            reasoning=reasoning,
        )
