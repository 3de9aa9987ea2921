from __future__ import annotations

__all__ = ["ConfigurationError", "InvalidRuntimeURLError", "PortCollisionError"]


class ConfigurationError(RuntimeError):
    """The container set cannot be configured; no container may start."""


class PortCollisionError(ConfigurationError):
    """Two containers declare the same exposed port."""

    def __init__(self, port: int, existing: str, claimant: str):
        self.port = port
        self.existing = existing
        self.claimant = claimant
        super().__init__(
            f"Cannot expose port {port} for {claimant} because another container "
            f"({existing}) is already using it."
        )


class InvalidRuntimeURLError(ConfigurationError):
    """The runtime URL of the running application does not parse."""

    def __init__(self, url: str, cause: Exception):
        self.url = url
        self.cause = cause
        super().__init__(f"The application URL {url!r} was not a valid URL: {cause}")
