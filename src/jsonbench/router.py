"""
Execution router for decoding.

Small payloads are decoded on the caller's thread. Payloads above the
offload threshold go to a single worker process, which answers each request
exactly once with {"success": True, "data": tree} or
{"success": False, "error": message}. Either way the caller gets a Future
that resolves to the tree or raises DecodeError with the same message shape.

There is no retry and no cancellation. decode() waits forever by default
when the worker stalls; pass a timeout to bound the wait.

If the worker cannot be started, or turns out to be unusable when a request
is submitted, the router decodes in-process for the rest of its lifetime.
"""

from __future__ import annotations

import logging
from concurrent.futures import BrokenExecutor, Executor, Future, ProcessPoolExecutor
from typing import Any

from .codec import decode as decode_text
from .codec import payload_size
from .config import get_config
from .errors import DecodeError

logger = logging.getLogger(__name__)


def handle_request(text: str) -> dict[str, Any]:
    """Worker side: decode text and reply with a single message."""
    try:
        return {"success": True, "data": decode_text(text)}
    except DecodeError as e:
        return {"success": False, "error": str(e)}


class ExecutionRouter:
    """Chooses in-process or worker decoding by payload size."""

    def __init__(
        self,
        threshold: int | None = None,
        executor: Executor | None = None,
        use_worker: bool = True,
    ):
        self._threshold = threshold if threshold is not None else get_config().io.offload_threshold
        self._owns_executor = executor is None
        if executor is not None:
            self._executor: Executor | None = executor
        elif use_worker:
            self._executor = self._start_worker()
        else:
            self._executor = None

    @staticmethod
    def _start_worker() -> Executor | None:
        try:
            return ProcessPoolExecutor(max_workers=1)
        except (OSError, NotImplementedError, ValueError) as e:
            logger.warning("Worker unavailable, decoding in-process: %s", e)
            return None

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def worker_available(self) -> bool:
        return self._executor is not None

    def should_offload(self, text: str) -> bool:
        """True when text would be decoded by the worker."""
        return self._executor is not None and payload_size(text) > self._threshold

    def submit(self, text: str) -> Future:
        """Start decoding text. The returned Future resolves exactly once."""
        result: Future = Future()

        executor = self._executor
        size = payload_size(text)
        if executor is not None and size > self._threshold:
            try:
                remote = executor.submit(handle_request, text)
            except (RuntimeError, BrokenExecutor) as e:
                # RuntimeError: executor already shut down
                logger.warning("Worker rejected request, decoding in-process from now on: %s", e)
                self._executor = None
            else:
                logger.debug("Offloaded %d bytes to worker", size)
                remote.add_done_callback(lambda f: _settle(result, f))
                return result

        try:
            result.set_result(decode_text(text))
        except DecodeError as e:
            result.set_exception(e)
        return result

    def decode(self, text: str, timeout: float | None = None) -> Any:
        """Blocking decode. Raises DecodeError, or TimeoutError if timeout expires."""
        return self.submit(text).result(timeout=timeout)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker if this router started it."""
        if self._executor is not None and self._owns_executor:
            self._executor.shutdown(wait=wait)
        self._executor = None

    def __enter__(self) -> ExecutionRouter:
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()


def _settle(result: Future, remote: Future) -> None:
    """Translate the worker's reply (or its failure) into result."""
    error = remote.exception()
    if error is not None:
        # the worker died or could not run the request
        result.set_exception(DecodeError(str(error) or type(error).__name__))
        return

    reply = remote.result()
    if reply["success"]:
        result.set_result(reply["data"])
    else:
        result.set_exception(DecodeError(reply["error"]))
