import os
from collections.abc import Mapping
from pydantic import BaseModel
from typing import Literal


env_prefix = "PODMANVETH_"


class ContainerRecord(BaseModel):
    id: str
    name: str
    ip: str | None = None


class VethLink(BaseModel):
    index: int
    name: str
    peer_index: int | None = None # None when the peer is not an ifindex (e.g. @NONE)


class TableRow(BaseModel):
    container_id: str
    veth: str
    name: str
    ip: str | None = None


class Settings(BaseModel):
    runtime: Literal["podman", "docker"] = "podman"
    netns_dir: str = "/var/run/netns"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    show_ip: bool = False


def load_settings(environ: Mapping[str, str] | None = None, **overrides: object) -> Settings:
    """Build settings from PODMANVETH_* environment variables. Raises pydantic.ValidationError on bad values"""
    if environ is None:
        environ = os.environ

    values: dict[str, object] = {}
    for field in ("runtime", "netns_dir", "log_level"):
        key = env_prefix + field.upper()
        if key in environ:
            values[field] = environ[key]
    if "log_level" in values:
        values["log_level"] = str(values["log_level"]).upper()

    values.update(overrides)
    return Settings.model_validate(values)
