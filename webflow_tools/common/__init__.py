"""
================================================================================
Webflow Tools Common Utilities
================================================================================

Exports:
    - get_config / set_config / reload_config: YAML + environment configuration
    - init_logger: Configure loguru sinks (stderr + rotating file)
    - RunLogger: Explicit logging context handed to harness components
    - default_run_logger: Process-wide RunLogger for the application boundary

Usage:
    from webflow_tools.common import get_config, init_logger, default_run_logger

    init_logger()
    timeout = get_config("timeouts.implicit_wait_ms", 10000)

================================================================================
"""

from .global_config import (
    get_config,
    init_logger,
    reload_config,
    set_config,
)
from .run_logger import RunLogger, default_run_logger

__all__ = [
    "get_config",
    "set_config",
    "reload_config",
    "init_logger",
    "RunLogger",
    "default_run_logger",
]
