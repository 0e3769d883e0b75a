from podmanveth.config import ContainerRecord
from podmanveth.errors import UnexpectedOutputError
from podmanveth.processes import CommandRunner, run_check_output


list_format = "{{.ID}}:{{.Names}}"
pid_format = "{{.State.Pid}}"
ip_format = "{{.NetworkSettings.IPAddress}}"


def list_containers(runtime: str,
                    filter_args: list[str] | None = None,
                    run: CommandRunner = run_check_output) -> list[ContainerRecord]:
    """
    Running containers as reported by `<runtime> ps`, in listing order.
    `filter_args` are passed through untouched, so they must not contain `--format`.
    """
    if filter_args is None:
        filter_args = []
    output = run([runtime, "ps", "--format", list_format] + filter_args)

    containers: list[ContainerRecord] = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        if ":" not in line:
            raise UnexpectedOutputError(f"Unexpected {runtime} ps line: {line!r}")
        container_id, name = line.split(":", 1)
        containers.append(ContainerRecord(id=container_id, name=name))
    return containers


def get_pid(runtime: str, container_id: str, run: CommandRunner = run_check_output) -> int:
    """Top level process id of a container. A stopped container reports 0"""
    output = run([runtime, "inspect", "--format", pid_format, container_id]).strip()
    try:
        return int(output)
    except ValueError:
        raise UnexpectedOutputError(f"Unexpected pid {output!r} for container {container_id}")


def get_ip(runtime: str, container_id: str, run: CommandRunner = run_check_output) -> str | None:
    """IP address of the container, None when unassigned or host networked"""
    output = run([runtime, "inspect", "--format", ip_format, container_id]).strip()
    if not output or output == "<no value>":
        return None
    return output
