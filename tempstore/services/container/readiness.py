"""Log-based readiness detection.

A service is considered ready once a known message appears in its combined
stdout/stderr. The output is scanned on an executor thread while the caller
waits on a timer; whichever finishes first decides the outcome, and the
attachment is closed as soon as the race is over so the scanning thread
exits with it.
"""

import asyncio
import threading
import time
from typing import Iterable

import docker
import structlog

from ...models.container import ContainerHandle, ReadinessOutcome, ReadinessStatus
from .client import DOCKER_ERRORS

logger = structlog.get_logger(__name__)


def _close_stream(stream) -> None:
    close = getattr(stream, "close", None)
    if close is None:
        return
    try:
        close()
    except Exception as e:
        logger.debug("Error closing log attachment", error=str(e))


class _LogScan:
    """One attachment to a container's output and the scan running over it."""

    def __init__(
        self,
        client: docker.DockerClient,
        container_id: str,
        needle: bytes,
        occurrence: int = 1,
    ):
        self._client = client
        self._container_id = container_id
        self._needle = needle
        self._remaining = occurrence
        self._lock = threading.Lock()
        self._stream = None
        self._stopped = False

    def run(self) -> ReadinessOutcome:
        """Attach and scan line by line. Runs on an executor thread."""
        try:
            stream = self._client.api.attach(
                self._container_id, stdout=True, stderr=True, stream=True, logs=True
            )
        except DOCKER_ERRORS as e:
            return ReadinessOutcome(
                ReadinessStatus.SCAN_ERROR, f"Failed to attach to container: {e}"
            )

        with self._lock:
            if self._stopped:
                _close_stream(stream)
                return ReadinessOutcome(ReadinessStatus.SCAN_ERROR, "Scan cancelled")
            self._stream = stream

        try:
            return self._scan(stream)
        except Exception as e:
            if self._stopped:
                return ReadinessOutcome(ReadinessStatus.SCAN_ERROR, "Scan cancelled")
            return ReadinessOutcome(
                ReadinessStatus.SCAN_ERROR, f"Error reading container output: {e}"
            )

    def _scan(self, chunks: Iterable[bytes]) -> ReadinessOutcome:
        pending = b""
        for chunk in chunks:
            if self._stopped:
                return ReadinessOutcome(ReadinessStatus.SCAN_ERROR, "Scan cancelled")
            pending += chunk
            *lines, pending = pending.split(b"\n")
            for line in lines:
                if self._matches(line):
                    return ReadinessOutcome(ReadinessStatus.FOUND)

        # Unterminated last line
        if pending and self._matches(pending):
            return ReadinessOutcome(ReadinessStatus.FOUND)
        return ReadinessOutcome(
            ReadinessStatus.SCAN_ERROR,
            "Container output closed before the message appeared",
        )

    def _matches(self, line: bytes) -> bool:
        if self._needle not in line:
            return False
        self._remaining -= 1
        return self._remaining <= 0

    def stop(self) -> None:
        """Stop scanning and release the attachment. Safe to call twice."""
        with self._lock:
            self._stopped = True
            stream, self._stream = self._stream, None
        if stream is not None:
            _close_stream(stream)


class ReadinessWatcher:
    """Watches container output for a readiness message."""

    def __init__(self, client: docker.DockerClient):
        """Initialize the watcher.

        Args:
            client: Docker client used to attach to containers
        """
        self._client = client

    async def watch_for_string_in_logs(
        self,
        handle: ContainerHandle,
        message: str,
        timeout: float,
        occurrence: int = 1,
    ) -> ReadinessOutcome:
        """Wait for ``message`` to appear in the container's output.

        Output written before the call is included. An empty message matches
        the first line. Each call opens its own attachment, so a message the
        service logs more than once can be waited for by its ``occurrence``.

        Args:
            handle: Container to watch
            message: Substring to look for in each output line
            timeout: Seconds to wait before giving up
            occurrence: Number of matching lines required

        Returns:
            FOUND on a match, SCAN_ERROR if the output ended or failed first,
            TIMED_OUT if the timeout elapsed first
        """
        start_time = time.perf_counter()
        scan = _LogScan(
            self._client, handle.id, message.encode("utf-8"), max(occurrence, 1)
        )
        loop = asyncio.get_running_loop()

        try:
            outcome = await asyncio.wait_for(
                loop.run_in_executor(None, scan.run), timeout=timeout
            )
        except asyncio.TimeoutError:
            outcome = ReadinessOutcome(
                ReadinessStatus.TIMED_OUT,
                f'Timeout exceeded, string not found: "{message}"',
            )
        finally:
            scan.stop()

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        if outcome.status is ReadinessStatus.FOUND:
            logger.info(
                "Container ready",
                container_id=handle.id[:12],
                message=message,
                elapsed_ms=f"{elapsed_ms:.1f}",
            )
        else:
            logger.warning(
                "Container not ready",
                container_id=handle.id[:12],
                message=message,
                status=outcome.status.value,
                detail=outcome.detail,
                timeout=timeout,
                elapsed_ms=f"{elapsed_ms:.1f}",
            )
        return outcome

