# Scoring stages module
from .rule_scoring import RuleScoringStage
from .intent_llm import IntentClassificationStage
