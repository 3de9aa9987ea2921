"""Network alias translation for application environments.

An application running on the host cannot resolve the network aliases of
its dependency containers. Once those containers publish their ports on the
same host ports, an environment such as::

    FOO_HOSTNAME=foo
    FOO_URL=http://foo:5432/app

is translated to::

    FOO_HOSTNAME=localhost
    FOO_URL=http://localhost:5432/app
"""

from __future__ import annotations

from collections.abc import Iterable, Set
from urllib.parse import SplitResult, urlsplit, urlunsplit

import structlog

from .core import Container
from .helpers import trace

__all__ = ["collect_network_aliases", "parse_url", "rewrite_env", "rewrite_value"]

logger = structlog.get_logger()

LOCAL_HOST = "localhost"


def collect_network_aliases(containers: Iterable[Container]) -> frozenset[str]:
    """Union of the network aliases of every non-application container."""
    return frozenset(
        alias
        for container in containers
        if not container.is_application
        for alias in container.network_aliases
    )


def parse_url(value: str, *, check_port: bool = False) -> SplitResult:
    """Parse an absolute URL with a host, raising ``ValueError`` otherwise.

    With ``check_port`` the port must also be a number in 0-65535.
    """
    parts = urlsplit(value)
    if not parts.scheme or not parts.netloc or not parts.hostname:
        raise ValueError(f"not an absolute URL with a host: {value!r}")
    if check_port:
        parts.port  # noqa: B018  (raises ValueError on a malformed port)
    return parts


def _split_netloc(netloc: str) -> tuple[str, str, str]:
    """Split ``netloc`` into (``user@`` prefix, host, ``:port`` suffix)."""
    userinfo, at, hostport = netloc.rpartition("@")
    if hostport.startswith("["):
        end = hostport.find("]") + 1
        host, rest = hostport[:end], hostport[end:]
    else:
        host, colon, port = hostport.partition(":")
        rest = colon + port
    return userinfo + at, host, rest


def _replace_host(value: str, parts: SplitResult, local_host: str) -> str:
    prefix, _, suffix = _split_netloc(parts.netloc)
    netloc = f"{prefix}{local_host}{suffix}"
    start = value.find("//") + 2
    if value[start : start + len(parts.netloc)] == parts.netloc:
        return value[:start] + netloc + value[start + len(parts.netloc) :]
    return urlunsplit(parts._replace(netloc=netloc))


def rewrite_value(
    value: str, aliases: Set[str], local_host: str = LOCAL_HOST
) -> str | None:
    """Return ``value`` with an alias host replaced by ``local_host``, or ``None``.

    Aliases are tried in sorted order and the last match wins.
    """
    try:
        parts: SplitResult | None = parse_url(value)
    except ValueError:
        parts = None

    host = _split_netloc(parts.netloc)[1] if parts is not None else None

    new_value = None
    for alias in sorted(aliases):
        if value == alias:
            new_value = local_host
        elif parts is not None and host == alias:
            new_value = _replace_host(value, parts, local_host)
    return new_value


def rewrite_env(
    container: Container, aliases: Set[str], local_host: str = LOCAL_HOST
) -> dict[str, str]:
    """Rewrite alias references in ``container``'s environment in place.

    Returns the changed entries as ``{key: new_value}``.
    """
    changes: dict[str, str] = {}
    env = container.env
    for key, value in list(env.items()):
        new_value = rewrite_value(value, aliases, local_host)
        if new_value is None:
            continue
        trace(
            logger,
            "info",
            "aliases.translate_env",
            container=container.config.name,
            key=key,
            old=value,
            new=new_value,
        )
        container.with_env(key, new_value)
        changes[key] = new_value
    return changes
