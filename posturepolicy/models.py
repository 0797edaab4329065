"""Data structures shared by the policy sources and the policy handler.

Policy artifacts (frameworks, controls, exceptions) are pydantic models so
that JSON returned by a source is validated on the way in and can be written
back out to the cache unchanged. Their inner structure belongs to the
evaluation engine, so unknown fields are kept as-is.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PolicyKind(str, Enum):
    """Kind of policy a scan request addresses."""

    FRAMEWORK = "Framework"
    CONTROL = "Control"
    RULE = "Rule"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PolicyIdentifier:
    """A single requested policy."""

    kind: PolicyKind
    name: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.name}"


@dataclass
class PolicyNotification:
    """One scan request: the ordered list of requested policies."""

    rules: List[PolicyIdentifier] = field(default_factory=list)

    @classmethod
    def for_names(cls, kind: PolicyKind, names: Iterable[str]) -> "PolicyNotification":
        """Build a notification requesting every name with the same kind."""
        return cls(rules=[PolicyIdentifier(kind=kind, name=name) for name in names])


class PolicyArtifact(BaseModel):
    """Base for artifacts fetched from a policy source."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = ""


class Control(PolicyArtifact):
    """A single checkable rule within a framework."""

    control_id: Optional[str] = Field(default=None, alias="controlID")
    description: Optional[str] = None


class Framework(PolicyArtifact):
    """A named collection of controls.

    A framework built from a control-kind request has no name; it only
    carries the fetched controls.
    """

    description: Optional[str] = None
    controls: List[Control] = Field(default_factory=list)


class PostureExceptionPolicy(PolicyArtifact):
    """An override that suppresses or alters specific findings."""

    policy_type: Optional[str] = Field(default=None, alias="policyType")
    actions: List[str] = Field(default_factory=list)
    resources: List[Dict] = Field(default_factory=list)
    posture_policies: List[Dict] = Field(default_factory=list, alias="posturePolicies")


ControlsInputs = Dict[str, List[str]]


@dataclass
class ScanSession:
    """Scan-ready policy set handed to the evaluation engine.

    Owned by the caller; the policy handler only fills in fields.
    """

    policies: List[Framework] = field(default_factory=list)
    exceptions: Optional[List[PostureExceptionPolicy]] = None
    controls_inputs: Optional[ControlsInputs] = None

    @property
    def control_count(self) -> int:
        """Total number of controls across all loaded frameworks."""
        return sum(len(framework.controls) for framework in self.policies)
