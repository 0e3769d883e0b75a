import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager


logger = logging.getLogger(__name__)


def handle_name(pid: int) -> str:
    return f"ns-{pid}"


@contextmanager
def exposed_namespace(pid: int, netns_dir: str = "/var/run/netns") -> Iterator[str]:
    """
    Make the network namespace of `pid` visible to `ip netns` for the
    duration of the block, and yield the name to pass to `ip netns exec`.

    The directory is created if missing and a stale handle for the same pid
    is replaced. The handle is removed on exit, including on error.
    """
    name = handle_name(pid)
    handle_path = os.path.join(netns_dir, name)

    os.makedirs(netns_dir, exist_ok=True)
    if os.path.lexists(handle_path):
        logger.debug("Replacing stale namespace handle %s", handle_path)
        os.unlink(handle_path)
    os.symlink(f"/proc/{pid}/ns/net", handle_path)
    logger.debug("Created namespace handle %s", handle_path)

    try:
        yield name
    finally:
        if os.path.lexists(handle_path):
            os.unlink(handle_path)
            logger.debug("Removed namespace handle %s", handle_path)


def exec_in(name: str, cmd: list[str]) -> list[str]:
    """Wrap `cmd` so it runs inside the exposed namespace `name`"""
    return ["ip", "netns", "exec", name] + cmd
