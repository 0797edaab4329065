"""Pytest configuration and shared fixtures."""

import pytest

from posturepolicy.cache import CacheStore
from posturepolicy.errors import PolicySourceError
from posturepolicy.getters.base import (
    ControlsInputsGetter,
    ExceptionsGetter,
    PolicyGetter,
    PolicyGetters,
)
from posturepolicy.models import PostureExceptionPolicy


class FakePolicySource(PolicyGetter, ExceptionsGetter, ControlsInputsGetter):
    """In-memory policy source recording every call."""

    def __init__(
        self,
        frameworks=None,
        controls=None,
        exceptions=None,
        controls_inputs=None,
        failing=(),
    ):
        self.frameworks = frameworks or {}
        self.controls = controls or {}
        self.exceptions = exceptions
        self.controls_inputs = controls_inputs
        self.failing = set(failing)
        self.calls = []

    def get_framework(self, name):
        self.calls.append(("framework", name))
        if name in self.failing:
            raise PolicySourceError(f"framework {name} unavailable")
        return self.frameworks.get(name)

    def get_control(self, name):
        self.calls.append(("control", name))
        if name in self.failing:
            raise PolicySourceError(f"control {name} unavailable")
        return self.controls.get(name)

    def get_exceptions(self, cluster_name):
        self.calls.append(("exceptions", cluster_name))
        if self.exceptions is None:
            raise PolicySourceError("exceptions unavailable")
        return self.exceptions

    def get_controls_inputs(self, cluster_name):
        self.calls.append(("controls_inputs", cluster_name))
        if self.controls_inputs is None:
            raise PolicySourceError("controls inputs unavailable")
        return self.controls_inputs


@pytest.fixture
def fake_source():
    """Factory for in-memory policy sources."""
    return FakePolicySource


@pytest.fixture
def getters_for():
    """Wrap a source as the getters of a policy handler."""
    return PolicyGetters.from_source


@pytest.fixture
def cache_store(tmp_path):
    """Cache store writing under a temporary directory."""
    return CacheStore(tmp_path / "cache")


@pytest.fixture
def sample_exceptions():
    """Exceptions as returned by a policy source."""
    return [
        PostureExceptionPolicy(
            name="ignore-kube-system",
            policyType="postureExceptionPolicy",
            actions=["alertOnly"],
            resources=[{"designatorType": "Attributes", "attributes": {"namespace": "kube-system"}}],
            posturePolicies=[{"controlID": "C-0001"}],
        )
    ]


@pytest.fixture
def sample_config():
    """Sample configuration dictionary."""
    return {
        "cluster_name": "minikube",
        "account_id": "2ce5daf4-e28d-4e8e-a5a0-1234567890ab",
        "cache": {
            "enabled": True,
            "cache_dir": "/tmp/posturepolicy-cache",
        },
        "source": {
            "type": "remote",
            "api_url": "https://api.example.com",
            "timeout": 10,
        },
        "logging": {
            "level": "DEBUG",
        },
    }
