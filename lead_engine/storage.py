"""
Lead storage
============
The pipeline talks to storage only through ``LeadStore``. ``InMemoryLeadStore``
is the default backend (replace with a database-backed store in production).
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .models.schemas import Offer, Lead, LeadProfile, IntentLabel, ScoreResult

logger = logging.getLogger(__name__)


class LeadStore(ABC):
    """Read/write contract consumed by the scoring pipeline"""

    @abstractmethod
    def get_latest_offer(self) -> Optional[Offer]:
        """Return the most recently created offer, or None"""

    @abstractmethod
    def get_all_leads(self) -> List[Lead]:
        """Return every lead in insertion order"""

    @abstractmethod
    def update_lead_scores(
        self,
        lead_id: int,
        rule_score: int,
        ai_score: int,
        final_score: int,
        intent: IntentLabel,
        reasoning: str,
    ) -> bool:
        """Atomically overwrite a lead's scoring fields. Returns False on failure."""


class InMemoryLeadStore(LeadStore):
    """Thread-safe in-process store"""

    def __init__(self):
        self._lock = threading.Lock()
        self._offers: List[Offer] = []
        self._leads: Dict[int, Lead] = {}
        self._results: List[ScoreResult] = []
        self._next_offer_id = 1
        self._next_lead_id = 1

    # -------------------------------------------------------------------------
    # Offers
    # -------------------------------------------------------------------------

    def save_offer(self, offer: Offer) -> Offer:
        with self._lock:
            stored = offer.model_copy(update={"id": self._next_offer_id})
            self._next_offer_id += 1
            self._offers.append(stored)
        logger.info("Saved offer %s (%s)", stored.id, stored.name)
        return stored

    def get_latest_offer(self) -> Optional[Offer]:
        with self._lock:
            latest = None
            # Later inserts win ties on created_at
            for offer in self._offers:
                if latest is None or offer.created_at >= latest.created_at:
                    latest = offer
            return latest

    # -------------------------------------------------------------------------
    # Leads
    # -------------------------------------------------------------------------

    def add_leads(self, leads: List[LeadProfile]) -> List[Lead]:
        stored = []
        with self._lock:
            for profile in leads:
                lead = Lead(
                    id=self._next_lead_id,
                    **profile.model_dump(include=set(LeadProfile.model_fields)),
                )
                self._next_lead_id += 1
                self._leads[lead.id] = lead
                stored.append(lead)
        logger.info("Added %d leads", len(stored))
        return stored

    def get_all_leads(self) -> List[Lead]:
        with self._lock:
            return [lead.model_copy() for lead in self._leads.values()]

    def get_lead(self, lead_id: int) -> Optional[Lead]:
        with self._lock:
            lead = self._leads.get(lead_id)
            return lead.model_copy() if lead else None

    def update_lead_scores(
        self,
        lead_id: int,
        rule_score: int,
        ai_score: int,
        final_score: int,
        intent: IntentLabel,
        reasoning: str,
    ) -> bool:
        with self._lock:
            lead = self._leads.get(lead_id)
            if lead is None:
                logger.error("Cannot update scores: lead %s not found", lead_id)
                return False
            # Swap in a new object so readers never see a half-written lead
            self._leads[lead_id] = lead.model_copy(update={
                "rule_score": rule_score,
                "ai_score": ai_score,
                "final_score": final_score,
                "intent": IntentLabel(intent),
                "reasoning": reasoning,
            })
            return True

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    def save_results(self, results: List[ScoreResult]):
        with self._lock:
            self._results = list(results)

    def get_results(self) -> List[ScoreResult]:
        with self._lock:
            return list(self._results)

    def clear(self):
        with self._lock:
            self._offers = []
            self._leads = {}
            self._results = []
            self._next_offer_id = 1
            self._next_lead_id = 1
