"""Consensus between the local classifier and external providers."""

from content_sentinel.sifters.consensus.combiner import (
    COMBINED_SOURCE,
    FALLBACK_SOURCE,
    HYBRID_SOURCE,
    combine,
    combine_hybrid,
    combine_majority,
    from_local,
)
from content_sentinel.sifters.consensus.consensus_analyzer import (
    ConsensusAnalyzer,
    EngineSnapshot,
    needs_external_opinion,
)

__all__ = [
    "COMBINED_SOURCE",
    "ConsensusAnalyzer",
    "EngineSnapshot",
    "FALLBACK_SOURCE",
    "HYBRID_SOURCE",
    "combine",
    "combine_hybrid",
    "combine_majority",
    "from_local",
    "needs_external_opinion",
]
