"""Registry for policy source backends.

Maps a source type name from the configuration (``remote``, ``local``) to a
factory that builds the getters for it.
"""

from typing import Callable, Dict, List, Optional

from ..common.config import SourceConfig
from ..common.logger import get_logger
from .base import PolicyGetters

logger = get_logger("source_registry")

SourceFactory = Callable[[SourceConfig], PolicyGetters]


class SourceRegistry:
    """Registry of policy source factories."""

    _instance: Optional["SourceRegistry"] = None
    _factories: Dict[str, SourceFactory]

    def __new__(cls) -> "SourceRegistry":
        """Singleton pattern for global registry."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._factories = {}
        return cls._instance

    def register(self, source_type: str, factory: SourceFactory) -> None:
        """Register a source factory.

        Args:
            source_type: Name used in the ``source.type`` setting
            factory: Callable building getters from a SourceConfig
        """
        if source_type in self._factories:
            logger.warning(f"Overwriting existing policy source: {source_type}")
        self._factories[source_type] = factory
        logger.debug(f"Registered policy source: {source_type}")

    def unregister(self, source_type: str) -> None:
        if source_type in self._factories:
            del self._factories[source_type]
            logger.debug(f"Unregistered policy source: {source_type}")

    def get_factory(self, source_type: str) -> Optional[SourceFactory]:
        return self._factories.get(source_type)

    def list_sources(self) -> List[str]:
        return list(self._factories.keys())

    def clear(self) -> None:
        """Clear all registered sources (mainly for testing)."""
        self._factories.clear()


_registry = SourceRegistry()


def get_registry() -> SourceRegistry:
    """Get the global source registry."""
    return _registry


def register_source(source_type: str, factory: SourceFactory) -> None:
    """Register a source factory with the global registry."""
    _registry.register(source_type, factory)


def build_getters(config: SourceConfig) -> PolicyGetters:
    """Build the getters for a source configuration.

    Args:
        config: Source configuration

    Returns:
        PolicyGetters for the configured source type

    Raises:
        ValueError: If the source type is not registered
    """
    if _registry.get_factory(config.type) is None:
        auto_register_sources()

    factory = _registry.get_factory(config.type)
    if factory is None:
        raise ValueError(
            f"Unknown policy source: {config.type}. "
            f"Available: {', '.join(sorted(_registry.list_sources()))}"
        )
    return factory(config)


def _remote_getters(config: SourceConfig) -> PolicyGetters:
    from .remote import RemotePolicySource

    source = RemotePolicySource(
        api_url=config.api_url,
        account_id=config.account_id,
        token=config.token,
        timeout=config.timeout,
    )
    return PolicyGetters.from_source(source)


def _local_getters(config: SourceConfig) -> PolicyGetters:
    from .local import LocalPolicySource

    source = LocalPolicySource(
        policy_paths=config.policy_paths,
        exceptions_path=config.exceptions_path,
        controls_inputs_path=config.controls_inputs_path,
    )
    return PolicyGetters.from_source(source)


def auto_register_sources() -> None:
    """Register the built-in policy sources not already registered."""
    for source_type, factory in (("remote", _remote_getters), ("local", _local_getters)):
        if _registry.get_factory(source_type) is None:
            register_source(source_type, factory)
