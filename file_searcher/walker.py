"""
Walker module - Concurrent recursive traversal with subtree pruning.

Lists directories and stats their children on a bounded thread pool,
applies the caller's ignore predicate once per entry, and collects files.
Workers only ever run a single listing or stat call; the coordinating
thread schedules follow-up work as results arrive, so recursion depth
never ties up pool threads.
"""
from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Dict, List, Optional, Tuple, Union

from file_searcher.accessor import LocalFileSystem
from file_searcher.errors import WalkCancelled, WalkError, WalkTimeout
from file_searcher.models import Entry, WalkResult, default_max_workers

logger = logging.getLogger(__name__)

IgnorePredicate = Callable[[Entry], bool]
PathLike = Union[str, "os.PathLike[str]"]

ERROR_POLICIES = ("fail", "skip")

# How often a blocked wait wakes up to look at the cancellation signal.
_CANCEL_POLL_INTERVAL = 0.05

_LIST = "list"
_STAT = "stat"


def _ignore_nothing(entry: Entry) -> bool:
    return False


class _DirectoryScan:
    """Join point for the metadata fetches of one directory's children."""

    __slots__ = ("path", "remaining", "entries")

    def __init__(self, path: str, remaining: int):
        self.path = path
        self.remaining = remaining
        self.entries: List[Entry] = []


class _Traversal:
    """State of a single walk; lives for exactly one Walker.traverse call."""

    def __init__(
        self,
        walker: "Walker",
        root: str,
        ignore: IgnorePredicate,
        executor: ThreadPoolExecutor,
        cancel_event: Optional[threading.Event],
        deadline: Optional[float],
    ):
        self.walker = walker
        self.root = root
        self.ignore = ignore
        self.executor = executor
        self.cancel_event = cancel_event
        self.deadline = deadline
        self.pending: Dict[Future, Tuple[str, str, Optional[_DirectoryScan]]] = {}
        # Only the coordinating thread touches this.
        self.result = WalkResult()

    def run(self) -> WalkResult:
        self._submit(_LIST, self.root)
        try:
            while self.pending:
                self._check_cancelled()
                done, _ = wait(
                    list(self.pending),
                    timeout=self._wait_timeout(),
                    return_when=FIRST_COMPLETED,
                )
                for future in done:
                    kind, path, scan = self.pending.pop(future)
                    if kind == _LIST:
                        self._on_listed(future, path)
                    else:
                        self._on_stat(future, path, scan)
        except BaseException:
            for future in self.pending:
                future.cancel()
            self.pending.clear()
            raise
        return self.result

    def _submit(self, kind: str, path: str, scan: Optional[_DirectoryScan] = None) -> None:
        self._check_cancelled()
        accessor = self.walker.accessor
        call = accessor.list_child_names if kind == _LIST else accessor.stat_entry
        future = self.executor.submit(call, path)
        self.pending[future] = (kind, path, scan)

    def _on_listed(self, future: Future, directory: str) -> None:
        try:
            names = future.result()
        except WalkError as exc:
            if directory == self.root:
                raise
            self.walker._handle_error(self.result, f"Failed to list directory {directory}", exc)
            return

        if not names:
            return

        scan = _DirectoryScan(directory, len(names))
        for name in names:
            self._submit(_STAT, os.path.join(directory, name), scan)

    def _on_stat(self, future: Future, path: str, scan: _DirectoryScan) -> None:
        scan.remaining -= 1
        try:
            scan.entries.append(future.result())
        except WalkError as exc:
            self.walker._handle_error(self.result, f"Failed to stat {path}", exc)

        if scan.remaining == 0:
            self._partition(scan)

    def _partition(self, scan: _DirectoryScan) -> None:
        files: List[Entry] = []
        directories: List[Entry] = []

        for entry in scan.entries:
            if self.ignore(entry):
                logger.debug("Ignoring path: %s", entry.path)
                continue
            if entry.is_file:
                files.append(entry)
            elif entry.is_directory:
                directories.append(entry)
            else:
                logger.debug("Skipping non-regular entry: %s", entry.path)

        self.result.files.extend(files)

        for directory in directories:
            self._submit(_LIST, directory.path)

    def _check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise WalkCancelled(f"Traversal of {self.root} was cancelled", self.root)
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise WalkTimeout(f"Traversal of {self.root} timed out", self.root)

    def _wait_timeout(self) -> Optional[float]:
        timeouts = []
        if self.cancel_event is not None:
            timeouts.append(_CANCEL_POLL_INTERVAL)
        if self.deadline is not None:
            timeouts.append(max(0.0, self.deadline - time.monotonic()))
        return min(timeouts) if timeouts else None


class Walker:
    """Recursive file walker with a bounded worker pool."""

    def __init__(
        self,
        accessor: Optional[LocalFileSystem] = None,
        max_workers: Optional[int] = None,
        on_error: str = "fail",
    ):
        """
        Initialize walker.

        Args:
            accessor: Metadata accessor; defaults to the local filesystem
            max_workers: Upper bound on concurrent listing/stat calls
            on_error: "fail" aborts the whole walk on the first error,
                "skip" logs the failing entry or subtree and continues
        """
        if on_error not in ERROR_POLICIES:
            raise ValueError("on_error must be 'fail' or 'skip'")

        if max_workers is None:
            max_workers = default_max_workers()
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")

        self.accessor = accessor or LocalFileSystem()
        self.max_workers = max_workers
        self.on_error = on_error

    def _handle_error(self, result: WalkResult, message: str, exc: WalkError) -> None:
        """
        Handle errors based on policy.

        "fail" re-raises the typed error for the caller to report, "skip"
        records it and moves on.
        """
        if self.on_error == "fail":
            raise exc

        logger.warning("%s: %s", message, exc)
        result.skipped.append(f"{message}: {exc}")

    def traverse(
        self,
        root: PathLike,
        ignore: Optional[IgnorePredicate] = None,
        cancel_event: Optional[threading.Event] = None,
        timeout: Optional[float] = None,
    ) -> WalkResult:
        """
        Walk a directory tree and collect every file not pruned by ``ignore``.

        Args:
            root: Directory to start from
            ignore: Predicate returning True for entries to drop; a dropped
                directory is not descended into
            cancel_event: Set it from another thread to abort the walk
            timeout: Seconds after which the walk is aborted

        Returns:
            WalkResult with collected files and, under "skip", the tolerated failures

        Raises:
            WalkError: On the first failure under "fail", on a root listing
                failure under either policy, or on cancellation/timeout
        """
        root = os.fspath(root)
        ignore = ignore or _ignore_nothing
        deadline = time.monotonic() + timeout if timeout is not None else None

        logger.info(
            "Walking directory: %s (max_workers=%s, on_error=%s)",
            root,
            self.max_workers,
            self.on_error,
        )

        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="file-searcher"
        ) as executor:
            traversal = _Traversal(self, root, ignore, executor, cancel_event, deadline)
            try:
                result = traversal.run()
            except BaseException:
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        logger.info("Found %s files under %s", len(result.files), root)
        if result.skipped:
            logger.warning("Skipped %s unreadable entries under %s", len(result.skipped), root)
        return result

    def walk(
        self,
        root: PathLike,
        ignore: Optional[IgnorePredicate] = None,
        cancel_event: Optional[threading.Event] = None,
        timeout: Optional[float] = None,
    ) -> List[Entry]:
        """Walk ``root`` and return file entries only, in unspecified order."""
        return self.traverse(root, ignore, cancel_event=cancel_event, timeout=timeout).files


def walk(
    root: PathLike,
    ignore: Optional[IgnorePredicate] = None,
    *,
    max_workers: Optional[int] = None,
    on_error: str = "fail",
    accessor: Optional[LocalFileSystem] = None,
    cancel_event: Optional[threading.Event] = None,
    timeout: Optional[float] = None,
) -> List[Entry]:
    """
    Recursively collect files under ``root``.

    Convenience wrapper around ``Walker(...).walk(...)``.
    """
    walker = Walker(accessor=accessor, max_workers=max_workers, on_error=on_error)
    return walker.walk(root, ignore, cancel_event=cancel_event, timeout=timeout)
