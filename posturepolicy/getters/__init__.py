"""Policy sources.

A policy source fetches frameworks and controls by name, plus the exceptions
and control inputs configured for a cluster. Sources are picked by type from
the configuration through the source registry.
"""

from .base import (
    ControlsInputsGetter,
    ExceptionsGetter,
    PolicyGetter,
    PolicyGetters,
)
from .local import LocalPolicySource
from .remote import RemotePolicySource
from .registry import (
    SourceRegistry,
    auto_register_sources,
    build_getters,
    get_registry,
    register_source,
)

__all__ = [
    "ControlsInputsGetter",
    "ExceptionsGetter",
    "LocalPolicySource",
    "PolicyGetter",
    "PolicyGetters",
    "RemotePolicySource",
    "SourceRegistry",
    "auto_register_sources",
    "build_getters",
    "get_registry",
    "register_source",
]
