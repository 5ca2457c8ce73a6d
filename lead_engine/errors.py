"""
Error types raised by the scoring pipeline
"""

from typing import List, Optional

from .models.schemas import ScoreResult


class LeadScoringError(Exception):
    """Base class for lead scoring failures"""


class NoOfferError(LeadScoringError):
    """No offer has been saved yet"""

    def __init__(self, message: str = "No offer found. POST /offer first."):
        super().__init__(message)


class NoLeadsError(LeadScoringError):
    """The lead collection is empty"""

    def __init__(self, message: str = "No leads found. POST /leads first."):
        super().__init__(message)


class ClassifierError(LeadScoringError):
    """The intent model could not produce a verdict. Never leaves the classifier."""


class PersistenceError(LeadScoringError):
    """
    Writing a lead's scores failed. The run stops; leads written before the
    failure keep their new scores.
    """

    def __init__(
        self,
        message: str,
        lead_id: Optional[int] = None,
        leads_scored: int = 0,
        results: Optional[List[ScoreResult]] = None,
    ):
        super().__init__(message)
        self.lead_id = lead_id
        self.leads_scored = leads_scored
        self.results = results or []
