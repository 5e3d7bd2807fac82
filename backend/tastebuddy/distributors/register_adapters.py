"""Compose the default distributor registry.

Call build_default_registry() once during startup. Adding a distributor
means adding its adapter class to ADAPTERS.
"""

from typing import List, Optional, Type

import structlog

from tastebuddy.core.log import LogSink
from tastebuddy.distributors.adapters import EdekaAdapter
from tastebuddy.distributors.base import BaseDistributorAdapter
from tastebuddy.distributors.fetcher import Fetcher
from tastebuddy.distributors.registry import DistributorRegistry

logger = structlog.get_logger(__name__)


ADAPTERS: List[Type[BaseDistributorAdapter]] = [
    EdekaAdapter,
]


def build_default_registry(
    fetcher: Fetcher, sink: Optional[LogSink] = None
) -> DistributorRegistry:
    """Instantiate every known adapter and register it.

    Args:
        fetcher: Transport shared by all adapters
        sink: Log sink shared by all adapters, defaults to one structlog
            logger per distributor

    Returns:
        Populated DistributorRegistry
    """
    registry = DistributorRegistry()

    for adapter_class in ADAPTERS:
        registry.register(adapter_class(fetcher, sink))

    logger.info(
        "all_distributors_registered",
        count=len(registry),
        distributors=registry.keys(),
    )
    return registry
