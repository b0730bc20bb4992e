"""Subprocess helper used to drive kubectl.

Every invocation is logged at debug level with its exit code and duration.
Credential flags are masked in the logged command line.
"""

import subprocess
import time
from typing import Dict, List, Optional

from kubectl_ai.utils.logging import get_logger

logger = get_logger(__name__)

SECRET_FLAGS = ("--token=", "--password=")


def redact(cmd: List[str]) -> str:
    """Render a command line for logs with credential values masked."""
    parts = []
    for arg in cmd:
        for prefix in SECRET_FLAGS:
            if arg.startswith(prefix):
                arg = prefix + "***"
                break
        parts.append(arg)
    return " ".join(parts)


def run_command(
    cmd: List[str],
    input: Optional[str] = None,
    capture_output: bool = True,
    text: bool = True,
    check: bool = True,
    timeout: Optional[float] = None,
    env: Optional[Dict[str, str]] = None,
    start_new_session: bool = False,
) -> subprocess.CompletedProcess:
    """Run ``cmd`` and return the completed process.

    Args:
        cmd: Executable followed by its arguments
        input: Data written to the process's stdin
        capture_output: Collect stdout and stderr on the result
        text: Decode output as text
        check: Raise when the exit code is non-zero
        timeout: Seconds before the process is killed
        env: Replacement environment
        start_new_session: Run the child in its own session so terminal
            signals aimed at this process group do not reach it

    Raises:
        subprocess.CalledProcessError: Non-zero exit with ``check`` set
        subprocess.TimeoutExpired: The timeout elapsed
        FileNotFoundError: The executable is not on PATH
    """
    display = redact(cmd)
    logger.debug("command.start", command=display)

    started = time.monotonic()
    result = subprocess.run(
        cmd,
        input=input,
        capture_output=capture_output,
        text=text,
        check=False,
        timeout=timeout,
        env=env,
        start_new_session=start_new_session,
    )
    logger.debug(
        "command.end",
        command=display,
        exit_code=result.returncode,
        duration_seconds=round(time.monotonic() - started, 3),
    )

    if check and result.returncode != 0:
        raise subprocess.CalledProcessError(
            result.returncode, cmd, output=result.stdout, stderr=result.stderr
        )
    return result
