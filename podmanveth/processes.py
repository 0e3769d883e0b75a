import logging
import os, shlex, subprocess
import psutil
from collections.abc import Callable


logger = logging.getLogger(__name__)


# Signature of anything that can stand in for run_check_output
CommandRunner = Callable[[list[str]], str]


def run_check_output(cmd: list[str]) -> str:
    """Runs a command, raises CalledProcessError if it failed, and returns its stdout."""
    logger.debug("exec: %s", shlex.join(cmd))
    result = subprocess.run(
        cmd,
        text=True,
        capture_output=True,
        check=True
    )
    return result.stdout


def process_exists(pid: int) -> bool:
    if pid <= 0:
        return False
    if os.path.exists(f"/proc/{pid}"):
        try:
            process = psutil.Process(pid)
            return process.is_running()
        except psutil.NoSuchProcess:
            return False
    return False
