"""Hollow mode: the application runs on the host, its dependencies in containers.

The configuration pass prepares a container set for that layout before any
container is started:

1. application environments stop referring to dependency network aliases
2. every dependency port is published on the same host port
3. application handles are pointed at the already running application
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

import structlog

from .aliases import LOCAL_HOST, collect_network_aliases, parse_url, rewrite_env
from .core import Container
from .errors import InvalidRuntimeURLError
from .helpers import trace
from .ports import PortAssignment, expose_fixed_ports

__all__ = [
    "ConfigurationResult",
    "HollowConfiguration",
    "HollowSettings",
    "apply_configuration",
]

logger = structlog.get_logger()

DEFAULT_PRIORITY = 0

ENV_HOSTNAME = "HOLLOW_HOSTNAME"
ENV_HTTP_PORT = "HOLLOW_HTTP_PORT"
ENV_HTTPS_PORT = "HOLLOW_HTTPS_PORT"
ENV_CONTEXT_ROOT = "HOLLOW_APP_CONTEXT_ROOT"
ENV_RUNTIME_URL = "HOLLOW_RUNTIME_URL"
ENV_LOCAL_HOST = "HOLLOW_LOCAL_HOST"


@dataclass
class HollowSettings:
    """Where the manually started application lives."""

    hostname: str = ""
    http_port: str = ""
    https_port: str = ""
    context_root: str = ""
    runtime_url: str | None = None  # overrides hostname/ports when set
    local_host: str = LOCAL_HOST

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> HollowSettings:
        env = os.environ if environ is None else environ
        return cls(
            hostname=env.get(ENV_HOSTNAME, "").strip(),
            http_port=env.get(ENV_HTTP_PORT, "").strip(),
            https_port=env.get(ENV_HTTPS_PORT, "").strip(),
            context_root=env.get(ENV_CONTEXT_ROOT, "").strip(),
            runtime_url=env.get(ENV_RUNTIME_URL) or None,
            local_host=env.get(ENV_LOCAL_HOST) or LOCAL_HOST,
        )

    @property
    def available(self) -> bool:
        return bool(self.hostname) and bool(self.http_port or self.https_port)

    def resolve_runtime_url(self) -> str:
        """Base URL of the running application; HTTPS wins over HTTP."""
        if self.runtime_url:
            return self.runtime_url
        if self.https_port:
            scheme, port = "https", self.https_port
        else:
            scheme, port = "http", self.http_port
        root = self.context_root.strip("/")
        return f"{scheme}://{self.hostname}:{port}/{root}"


@dataclass
class ConfigurationResult:
    """Outcome of one configuration pass."""

    aliases: frozenset[str]
    ports: PortAssignment
    runtime_url: str
    rewritten: dict[str, dict[str, str]] = field(default_factory=dict)


class HollowConfiguration:
    """Configures a container set for an application running outside the network."""

    PRIORITY = DEFAULT_PRIORITY - 20

    def __init__(self, settings: HollowSettings):
        self.settings = settings
        self._log = logger.bind(environment="hollow")

    def is_available(self) -> bool:
        return self.settings.available

    @property
    def priority(self) -> int:
        return self.PRIORITY

    def apply(self, containers: Sequence[Container]) -> ConfigurationResult:
        """Run the configuration pass; raises before any handle gets a running URL."""
        applications = [c for c in containers if c.is_application]

        # Translate network aliases referenced by application environments
        aliases = collect_network_aliases(containers)
        rewritten: dict[str, dict[str, str]] = {}
        for app in applications:
            changes = rewrite_env(app, aliases, self.settings.local_host)
            if changes:
                rewritten[app.config.name] = changes

        # Publish every declared port on the same host port
        ports = expose_fixed_ports(containers)

        # Point the application handles at the running server
        runtime_url = self.settings.resolve_runtime_url()
        try:
            parse_url(runtime_url, check_port=True)
        except ValueError as e:
            raise InvalidRuntimeURLError(runtime_url, e) from e
        for app in applications:
            app.set_running_url(runtime_url)

        trace(
            self._log,
            "info",
            "configuration.applied",
            runtime_url=runtime_url,
            applications=len(applications),
            ports=len(ports),
        )
        return ConfigurationResult(
            aliases=aliases, ports=ports, runtime_url=runtime_url, rewritten=rewritten
        )


def apply_configuration(
    containers: Sequence[Container], settings: HollowSettings
) -> ConfigurationResult:
    """Run one hollow-mode configuration pass over ``containers``."""
    return HollowConfiguration(settings).apply(containers)
