"""Registry mapping distributor keys to adapter instances."""

from typing import Dict, Iterator, List

import structlog

from tastebuddy.core.exceptions import UnknownDistributorError
from tastebuddy.distributors.base import BaseDistributorAdapter


logger = structlog.get_logger(__name__)


class DistributorRegistry:
    """Static key -> adapter mapping built once at startup.

    Adapters are registered as ready instances, each already holding its
    fetcher and log sink.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._adapters: Dict[str, BaseDistributorAdapter] = {}

    def register(self, adapter: BaseDistributorAdapter) -> None:
        """Register an adapter under its distributor key.

        Args:
            adapter: Adapter instance (must inherit from BaseDistributorAdapter)

        Raises:
            ValueError: If the object is not an adapter or the key is taken
        """
        if not isinstance(adapter, BaseDistributorAdapter):
            raise ValueError(f"Adapter must inherit from BaseDistributorAdapter: {adapter!r}")

        key = adapter.distributor
        if key in self._adapters:
            raise ValueError(f"Distributor already registered: {key}")

        self._adapters[key] = adapter
        logger.info("distributor_registered", distributor=key, adapter=type(adapter).__name__)

    def get(self, key: str) -> BaseDistributorAdapter:
        """Resolve the adapter for a distributor key.

        Raises:
            UnknownDistributorError: If no adapter is registered under key
        """
        try:
            return self._adapters[key]
        except KeyError:
            logger.warning("distributor_not_found", distributor=key)
            raise UnknownDistributorError(key) from None

    def keys(self) -> List[str]:
        """Registered distributor keys, in registration order."""
        return list(self._adapters.keys())

    def has(self, key: str) -> bool:
        return key in self._adapters

    def __contains__(self, key: object) -> bool:
        return key in self._adapters

    def __iter__(self) -> Iterator[BaseDistributorAdapter]:
        return iter(self._adapters.values())

    def __len__(self) -> int:
        return len(self._adapters)
