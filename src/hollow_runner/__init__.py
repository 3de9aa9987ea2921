from importlib.metadata import PackageNotFoundError, version

from .configuration import (
    ConfigurationResult,
    HollowConfiguration,
    HollowSettings,
    apply_configuration,
)
from .core import Container, ContainerConfig, ContainerRole
from .errors import ConfigurationError, InvalidRuntimeURLError, PortCollisionError

try:
    __version__ = version("hollow-runner")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "ConfigurationError",
    "ConfigurationResult",
    "Container",
    "ContainerConfig",
    "ContainerRole",
    "HollowConfiguration",
    "HollowSettings",
    "InvalidRuntimeURLError",
    "PortCollisionError",
    "__version__",
    "apply_configuration",
]
