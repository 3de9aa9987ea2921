"""Fixed host port exposure for a container set.

Every declared container port N is published on host port N, so a process
on the host reaches each dependency at ``localhost:N``. Two containers
declaring the same port cannot both be published; that is reported before
any container starts.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

import structlog

from .core import Container
from .errors import PortCollisionError
from .helpers import trace

__all__ = ["PortAssignment", "expose_fixed_ports"]

logger = structlog.get_logger()


class PortAssignment:
    """Host ports claimed during one configuration pass: ``{port: identity}``."""

    def __init__(self) -> None:
        self._claims: dict[int, str] = {}

    def claim(self, port: int, identity: str) -> None:
        if port in self._claims:
            raise PortCollisionError(port, self._claims[port], identity)
        self._claims[port] = identity

    def as_dict(self) -> dict[int, str]:
        return dict(self._claims)

    def __contains__(self, port: object) -> bool:
        return port in self._claims

    def __getitem__(self, port: int) -> str:
        return self._claims[port]

    def __iter__(self) -> Iterator[int]:
        return iter(self._claims)

    def __len__(self) -> int:
        return len(self._claims)

    def __repr__(self) -> str:
        return f"<PortAssignment {self._claims}>"


def expose_fixed_ports(containers: Sequence[Container]) -> PortAssignment:
    """Pin each declared port to the same host port, failing on the first collision."""
    assignment = PortAssignment()
    for container in containers:
        for port in container.exposed_ports:
            trace(logger, "debug", "ports.expose", port=port, image=container.image)
            assignment.claim(port, container.image)
            container.add_fixed_exposed_port(port, port)
    return assignment
