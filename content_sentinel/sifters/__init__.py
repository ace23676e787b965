"""Analytical components of the engine.

- lexical: deterministic local classifier
- consensus: reconciliation of local and external opinions
- verification: rubric credibility score and risk table
"""

from content_sentinel.sifters.consensus import ConsensusAnalyzer
from content_sentinel.sifters.lexical import LexicalClassifier
from content_sentinel.sifters.verification import VerificationScorer

__all__ = ["ConsensusAnalyzer", "LexicalClassifier", "VerificationScorer"]
