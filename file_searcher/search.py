"""
Search orchestrator - Turns a SearchConfig into a finished file listing.

Builds the ignore predicate from the configured patterns, runs the walker
and packages the outcome for reporting:
Config -> Ignore predicate -> Walker -> SearchResult
"""
import logging
import threading
import time
from typing import Optional

from file_searcher.accessor import LocalFileSystem
from file_searcher.ignore import build_ignore_predicate
from file_searcher.models import SearchConfig, SearchResult
from file_searcher.walker import Walker

logger = logging.getLogger(__name__)


class FileSearch:
    """Runs one configured recursive file search."""

    def __init__(self, config: SearchConfig, accessor: Optional[LocalFileSystem] = None):
        """
        Initialize search with configuration.

        Args:
            config: Search configuration
            accessor: Optional metadata accessor override
        """
        self.config = config
        self.walker = Walker(
            accessor=accessor,
            max_workers=config.max_workers,
            on_error=config.on_error,
        )
        self.ignore = build_ignore_predicate(
            config.root_directory,
            config.ignore_patterns,
            mode=config.match_mode,
        )

    def run(self, cancel_event: Optional[threading.Event] = None) -> SearchResult:
        """
        Run the search.

        Args:
            cancel_event: Optional signal to abort the walk from another thread

        Returns:
            SearchResult with all files found

        Raises:
            WalkError: If the traversal fails; no partial result is returned
        """
        root = self.config.root_directory
        result = SearchResult(root_directory=root)

        logger.info("Searching %s", root)
        if self.config.ignore_patterns:
            logger.info(
                "Ignoring %s (%s match)",
                ", ".join(self.config.ignore_patterns),
                self.config.match_mode,
            )

        started = time.monotonic()
        try:
            walk_result = self.walker.traverse(
                root,
                self.ignore,
                cancel_event=cancel_event,
                timeout=self.config.timeout,
            )
        except Exception as e:
            logger.error("Search failed: %s", e)
            raise

        result.files = walk_result.files
        result.total_files = len(walk_result.files)
        result.skipped = walk_result.skipped
        result.elapsed_seconds = time.monotonic() - started

        logger.info(
            "Search complete: %s files in %.2fs (%s skipped)",
            result.total_files,
            result.elapsed_seconds,
            len(result.skipped),
        )
        return result


def configure_logging(level: str = "INFO") -> None:
    """
    Configure logging for the search.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
