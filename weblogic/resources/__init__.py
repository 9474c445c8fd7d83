from .base import BaseResource
from .weblogicserver import WeblogicServers
from .locator import ResourceLocator
from .lifecycle import DependentResources

__all__ = [
    "BaseResource",
    "WeblogicServers",
    "ResourceLocator",
    "DependentResources",
]
