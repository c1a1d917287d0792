"""RSS feed generation for the local podcast.

Podcast clients usually sort episodes by publish date rather than document
order, so the playlist order is also written into the cached files'
modification times before the feed is served.
"""

import logging
import os
import time
from datetime import datetime, timezone
from urllib.parse import quote

from feedgen.feed import FeedGenerator

from podcasterator.config.schema import DEFAULT_PODCAST_TITLE
from podcasterator.playlist.models import AudioEntry, PodcastMetadata
from podcasterator.utils.files import content_type_for

logger = logging.getLogger(__name__)

ARTWORK_ROUTE = "/artwork.jpg"
FEED_ROUTE = "/feed.xml"
FILES_ROUTE = "/files"

# Gap between consecutive episodes' publish times, in seconds
PUBLISH_STEP_SECONDS = 1


def episode_url(base_url: str, entry: AudioEntry) -> str:
    """Build the download URL for an entry."""
    return f"{base_url}{FILES_ROUTE}/{entry.id}/{quote(entry.display_name, safe='')}"


class FeedSynthesizer:
    """Builds the syndication document from the playlist.

    Example:
        >>> synthesizer = FeedSynthesizer()
        >>> synthesizer.assign_publish_order(store.entries)
        >>> xml = synthesizer.build(store.entries, metadata, "http://192.168.1.20:8080")
    """

    def __init__(self, description: str = "Local podcast feed"):
        self.description = description

    def assign_publish_order(
        self, entries: list[AudioEntry], now: float | None = None
    ) -> None:
        """Stamp modification times so the first entry is the newest.

        Entry i of n gets ``now + (n - 1 - i) * PUBLISH_STEP_SECONDS``.

        Args:
            entries: Playlist entries in order
            now: Base POSIX timestamp (defaults to the current time)
        """
        base = time.time() if now is None else now
        count = len(entries)

        for index, entry in enumerate(entries):
            stamp = base + (count - 1 - index) * PUBLISH_STEP_SECONDS
            try:
                os.utime(entry.cached_path, (stamp, stamp))
            except OSError as e:
                logger.warning(f"Could not set publish time for {entry.display_name}: {e}")

    def build(
        self, entries: list[AudioEntry], metadata: PodcastMetadata, base_url: str
    ) -> bytes:
        """Render the RSS document.

        Entries whose cached file has disappeared are left out.

        Args:
            entries: Playlist entries in order
            metadata: Podcast title and artwork
            base_url: Server base URL without trailing slash

        Returns:
            RSS 2.0 XML document
        """
        fg = FeedGenerator()
        fg.load_extension("podcast")

        title = metadata.title.strip() or DEFAULT_PODCAST_TITLE
        fg.title(title)
        fg.link(href=base_url)
        fg.description(self.description)
        fg.lastBuildDate(datetime.now(timezone.utc))

        if metadata.has_artwork:
            artwork_url = f"{base_url}{ARTWORK_ROUTE}"
            fg.image(url=artwork_url, title=title, link=base_url)
            fg.podcast.itunes_image(artwork_url)

        for entry in entries:
            try:
                stat_result = entry.cached_path.stat()
            except OSError:
                logger.debug(f"Leaving missing file out of feed: {entry.cached_path}")
                continue

            url = episode_url(base_url, entry)

            fe = fg.add_entry(order="append")
            fe.id(entry.id)
            fe.guid(entry.id, permalink=False)
            fe.title(entry.display_name)
            fe.link(href=url)
            fe.enclosure(url, str(stat_result.st_size), content_type_for(entry.cached_path))
            fe.published(datetime.fromtimestamp(stat_result.st_mtime, tz=timezone.utc))

        return fg.rss_str(pretty=True)
