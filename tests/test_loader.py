"""Tests for plugin discovery and registration."""

from typing import TYPE_CHECKING

import pydantic
import pytest

from attrtree.builtins import required
from attrtree.core import PluginRegistry
from attrtree.errors import PluginError, PluginWarning
from attrtree.extensions import Plugin
from attrtree.settings import Settings
from tests.examples.plugins import example, ranges, trace

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from pytest_mock import MockType


def test_builtins(patch_entrypoints: 'Callable[..., MockType]') -> None:
    """Register built-in plugins."""
    patch_entrypoints()

    registry = PluginRegistry()

    assert [*registry] == ['builtins.required']
    assert registry.get('builtins.required') is required
    assert registry.get('required') is required
    assert 'required' in registry
    assert 'missing' not in registry


def test_load_plugins(patch_entrypoints: 'Callable[..., MockType]') -> None:
    """Load plugins and plugin lists from entry points."""
    patch_entrypoints(example)

    registry = PluginRegistry()

    assert [*registry] == ['builtins.required', 'tests.ranges', 'tests.trace']
    assert registry.get('ranges') is ranges
    assert registry.get('tests.trace') is trace


def test_no_auto_load(patch_entrypoints: 'Callable[..., MockType]') -> None:
    """Skip discovery when disabled."""
    entrypoints = patch_entrypoints(ranges)

    registry = PluginRegistry(auto_load=False)

    assert [*registry] == ['builtins.required']
    entrypoints.assert_not_called()


def test_settings(monkeypatch: pytest.MonkeyPatch,
                  patch_entrypoints: 'Callable[..., MockType]') -> None:
    """Resolve registry defaults from the environment."""
    monkeypatch.setenv('ATTRTREE_STRICT', 'true')
    monkeypatch.setenv('ATTRTREE_LOAD_PLUGINS', 'false')
    monkeypatch.setenv('ATTRTREE_PLUGINS_GROUP', 'custom_group')
    entrypoints = patch_entrypoints(ranges)

    settings = Settings()
    registry = PluginRegistry()

    assert settings.strict is True
    assert registry.strict_mode is True
    assert registry.group == 'custom_group'
    entrypoints.assert_not_called()


def test_shadowing(patch_entrypoints: 'Callable[..., MockType]') -> None:
    """Warn about plugins shadowing registered ones."""
    patch_entrypoints(ranges)
    registry = PluginRegistry()

    replacement = Plugin(name='ranges')
    patch_entrypoints(replacement)

    with pytest.warns(PluginWarning, match=r'is shadowing an existing$'):
        registry.load_plugins()

    assert registry.get('tests.ranges') is replacement


def test_strict_shadowing(patch_entrypoints: 'Callable[..., MockType]') -> None:
    """Fail on plugins shadowing registered ones on strict mode."""
    patch_entrypoints()
    registry = PluginRegistry(strict=True)

    with pytest.raises(PluginError, match=r"^Plugin 'builtins.required' from .+ is shadowing an existing$"):
        registry.add_plugin(Plugin(name='required'))

    assert registry.get('required') is required


def test_load_failure(patch_entrypoints: 'Callable[..., MockType]') -> None:
    """Warn about entry points failing to load."""
    patch_entrypoints(ranges, raises=ImportError('missing module'))

    with pytest.warns(PluginWarning, match=r"^Failed to load entrypoint 'tests'$"):
        registry = PluginRegistry()

    assert [*registry] == ['builtins.required']


def test_strict_load_failure(patch_entrypoints: 'Callable[..., MockType]') -> None:
    """Fail on entry points failing to load on strict mode."""
    patch_entrypoints(ranges, raises=ImportError('missing module'))

    with pytest.raises(PluginError, match=r"^Failed to load entrypoint 'tests'$") as error:
        PluginRegistry(strict=True)

    assert isinstance(error.value.__cause__, ImportError)
    assert error.value.entrypoint is not None


def test_validation_failure(patch_entrypoints: 'Callable[..., MockType]') -> None:
    """Warn about entry points with invalid plugin declarations."""
    with pytest.raises(pydantic.ValidationError) as validation_error:
        Plugin(name='not valid')

    patch_entrypoints(ranges, raises=validation_error.value)

    with pytest.warns(PluginWarning, match=r"^Failed to validate entrypoint 'tests'$"):
        PluginRegistry()


def test_not_a_plugin(patch_entrypoints: 'Callable[..., MockType]') -> None:
    """Warn about entry points not referring to plugins."""
    patch_entrypoints([ranges, 'not a plugin'])

    with pytest.warns(PluginWarning, match=r'object is not a plugin$'):
        registry = PluginRegistry()

    assert registry.get('ranges') is ranges


def test_strict_not_a_plugin(patch_entrypoints: 'Callable[..., MockType]') -> None:
    """Fail on entry points not referring to plugins on strict mode."""
    patch_entrypoints(object())

    with pytest.raises(PluginError, match=r'object is not a plugin$'):
        PluginRegistry(strict=True)


def test_short_names_with_entrypoint_namespaces(patch_entrypoints: 'Callable[..., MockType]') -> None:
    """Resolve short names of plugins from entry points with dotted or dashed names."""
    patch_entrypoints(ranges, name='acme-tools.extra')

    registry = PluginRegistry()

    assert [*registry] == ['builtins.required', 'acme-tools.extra.ranges']
    assert registry.get('ranges') is ranges
    assert registry.get('extra') is None
    assert 'ranges' in registry
