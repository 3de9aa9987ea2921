from __future__ import annotations

import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

__all__ = ["Container", "ContainerConfig", "ContainerRole", "get_podman_exe"]


def get_podman_exe() -> str:
    """Locate the podman binary the run command is rendered for."""
    exe = shutil.which("podman")
    if not exe:
        raise RuntimeError("podman not found in PATH")
    return exe


class ContainerRole(str, Enum):
    """What a container is to the test run."""

    DEPENDENCY = "dependency"
    APPLICATION = "application"


@dataclass
class ContainerConfig:
    """Declared container configuration.

    Key features:
    - ``ports`` → ``{container_port: host_port | None}``, ``None`` means an
      ephemeral host port. Key order is declaration order.
    - ``network`` + ``network_aliases`` → names siblings use to reach it
    - ``role`` → dependency or application under test, fixed at creation
    - ``env`` → live environment, rewritten in place for applications
    """

    name: str
    image: str
    role: ContainerRole = ContainerRole.DEPENDENCY
    ports: dict[int, int | None] | None = None  # {internal: host | None}
    network: str | None = None
    network_aliases: set[str] | None = None
    env: dict[str, str] | None = None
    volumes: dict[Path, str] | None = None  # host → container
    command: list[str] | None = None


class Container:
    """Podman container handle, configured before it is started."""

    _podman_exe: str | None = None

    def __init__(self, config: ContainerConfig):
        """Initialize a container handle."""
        self.config = config
        # Set by the container runtime once the container is started
        self.container_id: str | None = None
        self.running_url: str | None = None
        self._fixed_ports: dict[int, int] = {}

    # --------------------------------------------------------------------- #
    # Podman executable
    # --------------------------------------------------------------------- #
    def _get_podman(self) -> str:
        if Container._podman_exe is None:
            exe = get_podman_exe()
            Container._podman_exe = exe
        return Container._podman_exe

    # --------------------------------------------------------------------- #
    # Declared metadata
    # --------------------------------------------------------------------- #
    @property
    def image(self) -> str:
        return self.config.image

    @property
    def role(self) -> ContainerRole:
        return self.config.role

    @property
    def is_application(self) -> bool:
        return self.config.role is ContainerRole.APPLICATION

    @property
    def exposed_ports(self) -> list[int]:
        """Declared container ports, in declaration order."""
        return list(self.config.ports or {})

    @property
    def network_aliases(self) -> set[str]:
        return set(self.config.network_aliases or ())

    # --------------------------------------------------------------------- #
    # Environment
    # --------------------------------------------------------------------- #
    @property
    def env(self) -> dict[str, str]:
        """The live environment mapping; edits apply to the config."""
        if self.config.env is None:
            self.config.env = {}
        return self.config.env

    def with_env(self, key: str, value: str) -> Container:
        """Set one environment variable."""
        self.env[key] = value
        return self

    # --------------------------------------------------------------------- #
    # Fixed port binding
    # --------------------------------------------------------------------- #
    def add_fixed_exposed_port(self, host_port: int, container_port: int) -> None:
        """Publish ``container_port`` on ``host_port`` instead of an ephemeral port."""
        if self.container_id:
            raise RuntimeError(
                f"Cannot pin port {container_port} of {self.config.name!r}: "
                "container is already started"
            )
        if self.config.ports is None:
            self.config.ports = {}
        self.config.ports[container_port] = host_port
        self._fixed_ports[container_port] = host_port

    @property
    def fixed_exposed_ports(self) -> dict[int, int]:
        """``{container_port: host_port}`` for every pinned port."""
        return dict(self._fixed_ports)

    # --------------------------------------------------------------------- #
    # Application endpoint
    # --------------------------------------------------------------------- #
    def set_running_url(self, url: str) -> None:
        """Point an application handle at an already running endpoint."""
        if not self.is_application:
            raise RuntimeError(
                f"Container {self.config.name!r} is a {self.role.value}, "
                "only application containers have a running URL"
            )
        self.running_url = url

    # --------------------------------------------------------------------- #
    # Build podman run command
    # --------------------------------------------------------------------- #
    def build_run_cmd(self) -> list[str]:
        cmd = [
            self._get_podman(),
            "run",
            "-d",
            "--name",
            self.config.name,
        ]

        # Network
        if self.config.network:
            cmd += ["--network", self.config.network]
        for alias in sorted(self.network_aliases):
            cmd += ["--network-alias", alias]

        # Ports
        for internal, host in (self.config.ports or {}).items():
            host_port = host if host is not None else ""
            cmd += ["-p", f"{host_port}:{internal}"]

        # Environment
        for k, v in (self.config.env or {}).items():
            cmd += ["-e", f"{k}={v}"]

        # Volumes
        for host_path, container_path in (self.config.volumes or {}).items():
            cmd += ["-v", f"{host_path}:{container_path}"]

        # Image
        cmd.append(self.config.image)

        # Command override
        if self.config.command:
            cmd += [*self.config.command]

        return cmd

    def __repr__(self) -> str:
        """Return a string representation of the container."""
        return f"<Container {self.config.name} [{self.role.value}] image={self.image}>"
