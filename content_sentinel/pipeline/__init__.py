"""Engine entry points.

Provides the facade callers use:
- ModerationPipeline: classify -> score, or verify_submission end to end
"""

from content_sentinel.pipeline.moderation_pipeline import ModerationPipeline

__all__ = ["ModerationPipeline"]
