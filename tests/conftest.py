from __future__ import annotations

import subprocess

import pytest

from podmanveth.config import Settings
from podmanveth.correlate import Correlator


HOST_LISTING = """\
7: veth1ce04be@if3: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 qdisc noqueue master cni-podman0 state UP mode DEFAULT group default
    link/ether 6a:2d:4e:11:02:9c brd ff:ff:ff:ff:ff:ff link-netns ns-1811
42: veth6638cfa@if3: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 qdisc noqueue master cni-podman0 state UP mode DEFAULT group default
    link/ether 0e:8b:1f:7a:55:21 brd ff:ff:ff:ff:ff:ff link-netns ns-2499
"""


def ns_listing(peer_index: int) -> str:
    return (
        f"3: eth0@if{peer_index}: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 qdisc noqueue state UP mode DEFAULT group default\n"
        "    link/ether 2a:95:4f:c1:0b:33 brd ff:ff:ff:ff:ff:ff link-netnsid 0\n"
    )


class FakeRunner:
    """Answers commands from a table; unknown commands fail like a missing container"""

    def __init__(self, responses: dict[tuple[str, ...], str]) -> None:
        self.responses = responses
        self.calls: list[list[str]] = []

    def __call__(self, cmd: list[str]) -> str:
        self.calls.append(list(cmd))
        key = tuple(cmd)
        if key not in self.responses:
            raise subprocess.CalledProcessError(
                125, cmd, output="", stderr="Error: no such container")
        return self.responses[key]


def container_responses(container_id: str, pid: int, peer_index: int,
                        ip: str = "", runtime: str = "podman") -> dict[tuple[str, ...], str]:
    return {
        (runtime, "inspect", "--format", "{{.State.Pid}}", container_id): f"{pid}\n",
        (runtime, "inspect", "--format", "{{.NetworkSettings.IPAddress}}", container_id): f"{ip}\n",
        ("ip", "netns", "exec", f"ns-{pid}", "ip", "link", "show", "type", "veth"): ns_listing(peer_index),
    }


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(netns_dir=str(tmp_path / "netns"))


@pytest.fixture
def scenario_runner() -> FakeRunner:
    responses = {
        ("podman", "ps", "--format", "{{.ID}}:{{.Names}}"): "abc123:thirsty_meitner\n",
        ("ip", "link", "show", "type", "veth"): HOST_LISTING,
    }
    responses.update(container_responses("abc123", 2499, 42, ip="10.0.0.2"))
    return FakeRunner(responses)


@pytest.fixture
def make_correlator():
    def _make(settings: Settings, runner: FakeRunner) -> Correlator:
        return Correlator(settings, run=runner, pid_alive=lambda pid: pid > 0)
    return _make
