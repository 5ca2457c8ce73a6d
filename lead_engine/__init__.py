"""
Lead Scoring Engine
===================
Scores prospective customers against a product offer:
  Rule Scoring: role, industry and completeness keywords (0-50)
  Intent Classification: LLM buying-intent verdict (0-50)
"""

__version__ = "1.0.0"
__author__ = "Lead Scoring Team"
