"""
External process runner used by the media processing stages
"""

import logging
import subprocess
from typing import NamedTuple, Optional, Sequence

from core.deadline import Deadline
from core.exceptions import ProcessingError

logger = logging.getLogger(__name__)

# How often a running subprocess is checked against its deadline
POLL_INTERVAL = 0.5


class ProcessResult(NamedTuple):
    stdout: str
    stderr: str
    returncode: int


class ProcessRunner:
    """
    Run an external tool to completion and capture its output.

    A non-zero exit status is reported through ``ProcessResult.returncode``
    rather than raised; callers decide what it means. ``ProcessingError`` is
    raised only when the tool cannot be started or the deadline passes.
    """

    def run(self, tool: str, args: Sequence[str], deadline: Optional[Deadline] = None) -> ProcessResult:
        command = [tool, *args]
        logger.debug("Running %s", ' '.join(command))

        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as exc:
            raise ProcessingError(f"Could not start {tool}: {exc}") from exc

        stdout, stderr = self._communicate(process, tool, deadline)
        return ProcessResult(
            stdout=stdout.decode('utf-8', errors='replace'),
            stderr=stderr.decode('utf-8', errors='replace'),
            returncode=process.returncode,
        )

    def _communicate(self, process, tool, deadline):
        while True:
            timeout = POLL_INTERVAL
            if deadline is not None:
                remaining = deadline.remaining()
                if remaining is not None:
                    timeout = min(timeout, remaining)
            try:
                return process.communicate(timeout=timeout)
            except subprocess.TimeoutExpired:
                if deadline is None or not deadline.expired:
                    continue
                process.kill()
                _, stderr = process.communicate()
                logger.warning("%s aborted: request deadline reached", tool)
                raise ProcessingError(
                    f"{tool} aborted: request deadline reached",
                    diagnostics=stderr.decode('utf-8', errors='replace'),
                )
