"""Base classes for policy sources.

A policy source provides up to three capabilities: fetching frameworks and
controls, fetching posture exceptions, and fetching per-account control
inputs. Each capability is its own interface so that a scan can, for
instance, load frameworks from local files while taking exceptions from the
remote API.

Sources raise ``PolicySourceError`` for any failure. A framework or control
that simply does not exist is reported by returning ``None``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ..models import Control, ControlsInputs, Framework, PostureExceptionPolicy


class PolicyGetter(ABC):
    """Fetches frameworks and controls by name."""

    @abstractmethod
    def get_framework(self, name: str) -> Optional[Framework]:
        """Fetch a framework.

        Args:
            name: Framework name (e.g. "nsa")

        Returns:
            Framework, or None if the source has no such framework

        Raises:
            PolicySourceError: If the fetch fails
        """
        pass

    @abstractmethod
    def get_control(self, name: str) -> Optional[Control]:
        """Fetch a single control.

        Args:
            name: Control name or ID (e.g. "C-0001")

        Returns:
            Control, or None if the source has no such control

        Raises:
            PolicySourceError: If the fetch fails
        """
        pass


class ExceptionsGetter(ABC):
    """Fetches posture exceptions for a cluster."""

    @abstractmethod
    def get_exceptions(self, cluster_name: str) -> List[PostureExceptionPolicy]:
        pass


class ControlsInputsGetter(ABC):
    """Fetches account-level control inputs for a cluster."""

    @abstractmethod
    def get_controls_inputs(self, cluster_name: str) -> ControlsInputs:
        pass


@dataclass
class PolicyGetters:
    """The set of sources a policy handler draws from."""

    policy_getter: PolicyGetter
    exceptions_getter: ExceptionsGetter
    controls_inputs_getter: ControlsInputsGetter

    @classmethod
    def from_source(cls, source) -> "PolicyGetters":
        """Use one source object for every capability."""
        return cls(
            policy_getter=source,
            exceptions_getter=source,
            controls_inputs_getter=source,
        )
