"""
Off-thread search worker.

A one-shot request/response contract: the caller sends a start, a goal and
a graph, and gets back either the full animation trace or an error string.
There are no partial results and no cancellation of a running search; a
newer request simply makes older ones stale.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Optional
import logging
import threading

from .config import SearchConfig
from .graph import TerrainGraph, format_key
from .steps import steps_to_dicts
from .surface import KeyLike, run_animated_search

logger = logging.getLogger(__name__)

COMPUTE_SEARCH = "COMPUTE_SEARCH"
SEARCH_COMPLETE = "SEARCH_COMPLETE"
SEARCH_ERROR = "SEARCH_ERROR"


def build_request(start: KeyLike, end: KeyLike, graph: TerrainGraph) -> Dict[str, Any]:
    """Wrap a search request in the message format handle_message expects."""
    return {
        "type": COMPUTE_SEARCH,
        "data": {
            "start_key": start if isinstance(start, str) else format_key(start),
            "end_key": end if isinstance(end, str) else format_key(end),
            "graph": graph.to_dict(),
        },
    }


def handle_message(
    message: Dict[str, Any],
    config: Optional[SearchConfig] = None
) -> Dict[str, Any]:
    """
    Answer one search request message.

    Args:
        message: {"type": "COMPUTE_SEARCH", "data": {"start_key", "end_key", "graph"}}
        config: Search parameters

    Returns:
        {"type": "SEARCH_COMPLETE", "data": {"animation_steps": [...]}} on
        success, {"type": "SEARCH_ERROR", "data": {"error": str}} otherwise
    """
    try:
        message_type = message.get("type")
        if message_type != COMPUTE_SEARCH:
            raise ValueError(f"Unknown message type: {message_type}")

        data = message["data"]
        graph = TerrainGraph.from_dict(data["graph"])
        steps = run_animated_search(data["start_key"], data["end_key"], graph, config)

        return {
            "type": SEARCH_COMPLETE,
            "data": {"animation_steps": steps_to_dicts(steps)},
        }
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning(f"handle_message: {type(e).__name__}: {e}")
        return {
            "type": SEARCH_ERROR,
            "data": {"error": str(e)},
        }


class SearchWorker:
    """
    Runs animated searches on a single background thread.

    The thread is only released by shutdown(), so use the worker as a
    context manager or call shutdown() explicitly when done.

    Example:
        >>> with SearchWorker() as worker:
        ...     future = worker.submit((0, 0), (30, 12), graph)
        ...     response = future.result()
        ...     if worker.is_current(future):
        ...         play(response["data"]["animation_steps"])
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        self.config = config
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="terrain-search")
        self._lock = threading.Lock()
        self._latest: Optional[Future] = None

    def submit(self, start: KeyLike, end: KeyLike, graph: TerrainGraph) -> Future:
        """
        Queue a search; the previous request, if still pending, is cancelled.

        Returns:
            Future resolving to the response message
        """
        message = build_request(start, end, graph)
        with self._lock:
            if self._latest is not None:
                self._latest.cancel()
            future = self._executor.submit(handle_message, message, self.config)
            self._latest = future
        return future

    def is_current(self, future: Future) -> bool:
        """True if no newer request has been submitted since future."""
        with self._lock:
            return future is self._latest

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.shutdown()
