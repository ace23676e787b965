"""Collaborators that reach out to the web on behalf of the engine."""

from content_sentinel.crawlers.metadata_fetcher import MetadataFetcher, parse_metadata

__all__ = ["MetadataFetcher", "parse_metadata"]
