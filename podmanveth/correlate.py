import logging
from collections.abc import Callable
from subprocess import CalledProcessError

from podmanveth.config import ContainerRecord, Settings, TableRow, VethLink
from podmanveth.errors import LinkLookupError, ResolutionError, UnexpectedOutputError
from podmanveth.netns import exposed_namespace, exec_in
from podmanveth.network import parse_link_listing, first_peer_index, find_peer
from podmanveth.processes import CommandRunner, run_check_output, process_exists
from podmanveth import runtime


logger = logging.getLogger(__name__)


veth_listing_cmd = ["ip", "link", "show", "type", "veth"]


def _command_failure(e: CalledProcessError) -> tuple[str, int]:
    cmd = e.cmd if isinstance(e.cmd, str) else " ".join(e.cmd)
    stderr = (e.stderr or "").strip()
    message = f"`{cmd}` exited with status {e.returncode}"
    if stderr:
        message += f": {stderr}"
    return message, e.returncode


class Correlator:
    """
    Joins runtime state with host link state.

    Every external query goes through `run`, so a fake can be injected.
    Failures are raised as ResolutionError naming the container and step.
    """
    def __init__(self,
                 settings: Settings,
                 run: CommandRunner = run_check_output,
                 pid_alive: Callable[[int], bool] = process_exists):
        self.settings = settings
        self.run = run
        self.pid_alive = pid_alive

    def _step(self, container_id: str | None, step: str, func: Callable[[], object]):
        try:
            return func()
        except CalledProcessError as e:
            message, code = _command_failure(e)
            raise ResolutionError(container_id, step, message, code) from e
        except FileNotFoundError as e:
            raise ResolutionError(container_id, step, str(e), 127) from e
        except (OSError, UnexpectedOutputError, LinkLookupError) as e:
            raise ResolutionError(container_id, step, str(e)) from e

    def list_containers(self, filter_args: list[str] | None = None) -> list[ContainerRecord]:
        return self._step(None, "list", lambda: runtime.list_containers(
            self.settings.runtime, filter_args, run=self.run))

    def host_links(self) -> list[VethLink]:
        return self._step(None, "host-links",
                          lambda: parse_link_listing(self.run(veth_listing_cmd)))

    def resolve_pid(self, container_id: str) -> int:
        pid = self._step(container_id, "pid",
                         lambda: runtime.get_pid(self.settings.runtime, container_id, run=self.run))
        if not self.pid_alive(pid):
            raise ResolutionError(container_id, "pid", f"container is not running (pid {pid})")
        return pid

    def resolve_interface_index(self, container_id: str) -> int:
        """Peer index of the first veth interface inside the container's namespace"""
        pid = self.resolve_pid(container_id)

        def query() -> str:
            with exposed_namespace(pid, self.settings.netns_dir) as ns_name:
                return self.run(exec_in(ns_name, veth_listing_cmd))

        output = self._step(container_id, "netns", query)
        peer_index = first_peer_index(parse_link_listing(output))
        if peer_index is None:
            raise ResolutionError(container_id, "index",
                                  f"no veth interface with a numeric peer in network namespace of pid {pid}")
        return peer_index

    def resolve_host_veth(self, container_id: str, peer_index: int, host_links: list[VethLink]) -> str:
        link = self._step(container_id, "veth", lambda: find_peer(peer_index, host_links))
        return link.name

    def resolve_ip(self, container_id: str) -> str | None:
        return self._step(container_id, "ip",
                          lambda: runtime.get_ip(self.settings.runtime, container_id, run=self.run))

    def build_rows(self, filter_args: list[str] | None = None) -> list[TableRow]:
        """
        Resolve every listed container. The host listing is taken once, before
        any container is resolved. Returns only when all rows are resolved.
        """
        containers = self.list_containers(filter_args)
        host_links = self.host_links()
        logger.debug("Found %d containers and %d host veth links", len(containers), len(host_links))

        rows: list[TableRow] = []
        for container in containers:
            peer_index = self.resolve_interface_index(container.id)
            veth = self.resolve_host_veth(container.id, peer_index, host_links)
            if self.settings.show_ip:
                container.ip = self.resolve_ip(container.id)
            logger.info("Container %s (%s) is attached to %s", container.id, container.name, veth)
            rows.append(TableRow(container_id=container.id, veth=veth, name=container.name, ip=container.ip))
        return rows
