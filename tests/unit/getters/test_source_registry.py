"""Tests for the policy source registry."""

from unittest.mock import MagicMock

import pytest

from posturepolicy.common.config import SourceConfig
from posturepolicy.getters.base import PolicyGetters
from posturepolicy.getters.local import LocalPolicySource
from posturepolicy.getters.registry import (
    SourceRegistry,
    auto_register_sources,
    build_getters,
    get_registry,
    register_source,
)
from posturepolicy.getters.remote import RemotePolicySource


class TestSourceRegistry:
    """Tests for SourceRegistry class."""

    def setup_method(self):
        """Set up a fresh registry for each test."""
        self.registry = SourceRegistry.__new__(SourceRegistry)
        self.registry._factories = {}

    def test_register(self):
        """Test factory registration."""
        factory = MagicMock()
        self.registry.register("memory", factory)

        assert self.registry.list_sources() == ["memory"]
        assert self.registry.get_factory("memory") is factory

    def test_register_overwrites(self):
        """Test registering the same name overwrites."""
        first, second = MagicMock(), MagicMock()
        self.registry.register("memory", first)
        self.registry.register("memory", second)

        assert self.registry.get_factory("memory") is second

    def test_unregister(self):
        """Test factory unregistration."""
        self.registry.register("memory", MagicMock())
        self.registry.unregister("memory")

        assert self.registry.get_factory("memory") is None

    def test_singleton(self):
        """Test the registry is a singleton."""
        assert SourceRegistry() is get_registry()


class TestBuildGetters:
    """Tests for building getters from configuration."""

    def setup_method(self):
        get_registry().clear()

    def teardown_method(self):
        get_registry().clear()

    def test_builtin_sources_registered_lazily(self):
        """Test built-in sources are available without explicit setup."""
        getters = build_getters(SourceConfig(type="local"))

        assert isinstance(getters.policy_getter, LocalPolicySource)
        assert set(get_registry().list_sources()) == {"remote", "local"}

    def test_remote_source(self):
        """Test the remote source uses the configured API."""
        getters = build_getters(
            SourceConfig(type="remote", api_url="https://api.example.com", account_id="acct")
        )

        source = getters.policy_getter
        assert isinstance(source, RemotePolicySource)
        assert source.account_id == "acct"
        assert getters.exceptions_getter is source
        assert getters.controls_inputs_getter is source
        source.close()

    def test_local_source_paths(self, tmp_path):
        """Test the local source uses the configured paths."""
        getters = build_getters(
            SourceConfig(type="local", policy_paths=[str(tmp_path / "nsa.json")])
        )

        assert getters.policy_getter.policy_paths == [tmp_path / "nsa.json"]

    def test_unknown_source(self):
        """Test an unknown source type is rejected."""
        auto_register_sources()

        with pytest.raises(ValueError, match="Unknown policy source: ftp"):
            build_getters(SourceConfig(type="ftp"))

    def test_custom_source(self):
        """Test a registered custom source is used."""
        getters = PolicyGetters.from_source(MagicMock())
        register_source("memory", lambda config: getters)

        assert build_getters(SourceConfig(type="memory")) is getters
