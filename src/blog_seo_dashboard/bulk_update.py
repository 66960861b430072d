"""
Bulk keyword refresh across every blog.

For each blog the updater takes the first primary and secondary keyword
from its `seo` document, asks the suggestion provider for new keywords,
and stores them as the pending `*New` lists. Blogs are processed in
batches with fixed pauses between calls; a stop flag is checked between
blogs so a caller on another thread can halt the run.

Failed calls are recorded and the run moves on. Nothing is retried.
"""

import logging
import threading
import time
from typing import Callable, Optional, Protocol

from .blog_store import BlogStore
from .config import BulkUpdateConfig
from .models import Blog, BulkUpdateProgress, FailedBlog, KeywordSuggestionSet, SkippedBlog
from .seo_fields import merge_new_keywords, seed_keywords

logger = logging.getLogger(__name__)

SKIP_MISSING_KEYWORDS = "Missing keywords"
SKIP_NO_SUGGESTIONS = "No suggestions found"


class SuggestionProvider(Protocol):
    def fetch_suggestions(self, primary_query: str, secondary_query: str) -> KeywordSuggestionSet:
        ...


ProgressCallback = Callable[[BulkUpdateProgress], None]


class BulkUpdater:
    """
    Refresh pending keyword suggestions for a collection of blogs.

    Args:
        store: Where blogs are read from and `seo` updates are written.
        provider: Source of keyword suggestions.
        config: Batch size and delays.
        on_progress: Called with the progress object after every change.
        sleep: Sleep function, replaceable in tests.
    """

    def __init__(
        self,
        store: BlogStore,
        provider: SuggestionProvider,
        config: Optional[BulkUpdateConfig] = None,
        on_progress: Optional[ProgressCallback] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store
        self.provider = provider
        self.config = config or BulkUpdateConfig()
        self.on_progress = on_progress
        self._sleep = sleep
        self._stop = threading.Event()
        self.progress = BulkUpdateProgress()

    def stop(self) -> None:
        """Ask a running update to stop after the current blog."""
        self._stop.set()

    @property
    def should_stop(self) -> bool:
        return self._stop.is_set()

    def _report(self, status: Optional[str] = None) -> None:
        if status is not None:
            self.progress.status = status
            logger.info(status)
        if self.on_progress is not None:
            self.on_progress(self.progress)

    def mark_stopped(self) -> BulkUpdateProgress:
        """Flag the current progress as stopped and report the final status."""
        self._stop.set()
        self.progress.stopped = True
        self._report(
            f"Update stopped. Successfully updated {self.progress.succeeded} blogs, "
            f"failed: {self.progress.failed_count}"
        )
        return self.progress

    def update_blog(self, blog: Blog) -> bool:
        """
        Refresh one blog. Returns True when the blog was updated.

        Blogs without seed keywords or without any suggestions are recorded
        as skipped. Errors propagate to the caller.
        """
        primary, secondary = seed_keywords(blog.seo)
        if not primary or not secondary:
            self.progress.skipped.append(SkippedBlog(blog.id, blog.title, SKIP_MISSING_KEYWORDS))
            self._report()
            return False

        suggestions = self.provider.fetch_suggestions(primary, secondary)
        if suggestions.is_empty:
            self.progress.skipped.append(SkippedBlog(blog.id, blog.title, SKIP_NO_SUGGESTIONS))
            self._report()
            return False

        seo = merge_new_keywords(
            blog.seo,
            suggestions.primary_keywords,
            suggestions.secondary_keywords,
        )
        self.store.update_seo(blog.id, seo)

        self.progress.succeeded += 1
        self.progress.current += 1
        self._report(
            f"Updated blog {self.progress.current}/{self.progress.total}: {blog.title} "
            f"with {len(suggestions.primary_keywords)} primary and "
            f"{len(suggestions.secondary_keywords)} secondary keywords"
        )
        return True

    def run(self, blogs: Optional[list[Blog]] = None) -> BulkUpdateProgress:
        """
        Process every blog and return the final progress report.

        Args:
            blogs: Blogs to process. Defaults to everything in the store.
        """
        self._stop.clear()
        self.progress = BulkUpdateProgress(status="Starting bulk update...")

        if blogs is None:
            blogs = self.store.list_blogs()

        batch_size = self.config.batch_size
        total_batches = -(-len(blogs) // batch_size)
        self.progress.total = len(blogs)
        self.progress.total_batches = total_batches
        self._report(f"Starting update of {len(blogs)} blogs in {total_batches} batches...")

        for batch_index in range(total_batches):
            if self.should_stop:
                break

            start = batch_index * batch_size
            end = min(start + batch_size, len(blogs))
            self.progress.batch_number = batch_index + 1
            self._report(
                f"Processing batch {batch_index + 1}/{total_batches} "
                f"({start + 1}-{end} of {len(blogs)})"
            )

            for blog in blogs[start:end]:
                if self.should_stop:
                    break

                try:
                    processed = self.update_blog(blog)
                except Exception as e:
                    logger.error(f"Failed to update blog {blog.id}: {e}")
                    self.progress.failed.append(FailedBlog(blog.id, blog.title, str(e)))
                    self._report()
                    processed = True

                # Skipped blogs move straight on without pausing.
                if processed:
                    self._sleep(self.config.blog_delay)

            if batch_index < total_batches - 1 and not self.should_stop:
                self._report(f"Pausing between batches... ({batch_index + 1}/{total_batches})")
                self._sleep(self.config.batch_delay)

        if self.should_stop:
            self.mark_stopped()
        else:
            self._report(
                f"Update completed. Successfully updated {self.progress.succeeded} blogs, "
                f"failed: {self.progress.failed_count}, skipped: {self.progress.skipped_count}"
            )

        return self.progress
