"""Project-wide constants.

Keep this file minimal and free of side effects.
"""

from __future__ import annotations

# Namespace used for path derivation when no product has been registered.
DEFAULT_PRODUCT_NAME = "dev.thmsn.unspecified"

ENV_PREFIX = "PRODUCT_PATHS_"

CONFIGS_DIRNAME = "configs"
LOGS_DIRNAME = "logs"

__all__ = ["CONFIGS_DIRNAME", "DEFAULT_PRODUCT_NAME", "ENV_PREFIX", "LOGS_DIRNAME"]
