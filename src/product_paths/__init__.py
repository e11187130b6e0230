# SPDX-License-Identifier: MIT
"""Product identity, descriptors and namespaced application directories.

Typical start-up sequence::

    from product_paths import declare_product, config_path, descriptor

    PRODUCT = declare_product("dev.thmsn.myapp", package="myapp")
    PRODUCT.set_global()

    print(PRODUCT.describe(descriptor.DEFAULT_DIRTY))
    settings_file = config_path("database")
"""

from . import descriptor
from .errors import (
    AlreadyRegisteredError,
    BuildInfoError,
    ClockBeforeEpochError,
    DirectoryCreationError,
    HostEnvironmentError,
    ProductPathsError,
    UnresolvablePlatformPathError,
)
from .models import AgentInfo, BuildProvenance, GitInfo, OsInfo
from .paths import (
    DirectoryKind,
    PathResolver,
    application_directory,
    config_path,
    configs_root,
    log_path,
    logs_root,
)
from .product import ProductIdentifier, declare_product
from .runtime.registry import GlobalRegistry, current, register

__all__ = [
    "AgentInfo",
    "AlreadyRegisteredError",
    "BuildInfoError",
    "BuildProvenance",
    "ClockBeforeEpochError",
    "DirectoryCreationError",
    "DirectoryKind",
    "GitInfo",
    "GlobalRegistry",
    "HostEnvironmentError",
    "OsInfo",
    "PathResolver",
    "ProductIdentifier",
    "ProductPathsError",
    "UnresolvablePlatformPathError",
    "application_directory",
    "config_path",
    "configs_root",
    "current",
    "declare_product",
    "descriptor",
    "log_path",
    "logs_root",
    "register",
]

__version__ = "0.1.0"
