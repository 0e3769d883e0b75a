from enum import IntEnum, unique
import os


# Capability bit numbers from linux/capability.h
@unique
class Capability(IntEnum):
    CAP_NET_ADMIN        = 12
    CAP_SYS_ADMIN        = 21


class Capabilities:
    """Capability masks of a process, read from the Cap* lines of its status file"""
    inheritable: int
    permitted: int
    effective: int

    def __init__(self, pid: int|None=None, proc_root: str="/proc"):
        if pid is None:
            pid =  os.getpid()
        self._read_status(os.path.join(proc_root, str(pid), "status"))

    def _read_status(self, path: str):
        caps = {}
        with open(path) as f:
            for line in f:
                key, _, value = line.partition(":")
                if key in ("CapInh", "CapPrm", "CapEff"):
                    caps[key] = int(value.strip(), 16)
        self.inheritable = caps["CapInh"]
        self.permitted   = caps["CapPrm"]
        self.effective   = caps["CapEff"]

    def has(self, cap: Capability, which: str = "effective") -> bool:
        """`which` names the mask to test: inheritable, permitted or effective"""
        mask: int = getattr(self, which)
        return bool(mask & (1 << cap))


# Exposing a namespace handle and running `ip netns exec` need both
REQUIRED = [Capability.CAP_NET_ADMIN, Capability.CAP_SYS_ADMIN]


def missing_capabilities(caps: Capabilities | None = None, uid: int | None = None) -> list[Capability]:
    """Capabilities from REQUIRED that the process lacks. Empty for root"""
    if uid is None:
        uid = os.geteuid()
    if uid == 0:
        return []
    if caps is None:
        caps = Capabilities()
    return [req for req in REQUIRED if not caps.has(req)]
