"""Syndication feed generation."""

from podcasterator.feed.synthesizer import FeedSynthesizer, episode_url

__all__ = ["FeedSynthesizer", "episode_url"]
