"""Plugin discovery and registration.

This module defines a registry of plugins available to schema authors:
the built-in plugins plus third-party plugins exposed via Python entry
points.

Plugins are loaded defensively: individual failures do not interrupt
the loading process unless strict mode is enabled.
"""

from typing import TYPE_CHECKING
from warnings import warn

from pydantic import ValidationError

from attrtree.builtins import required
from attrtree.errors import PluginError, PluginWarning
from attrtree.extensions import Plugin
from attrtree.names import QUALNAME_PATTERN
from attrtree.settings import Settings

if TYPE_CHECKING:
    from collections.abc import Iterator
    from importlib.metadata import EntryPoint

#: Namespace of plugins shipped with the library.
BUILTINS_NAMESPACE = 'builtins'


class PluginRegistry:
    """Registry of plugins by qualified name.

    Qualified names are `<namespace>.<plugin name>`, where the namespace
    is `builtins` for built-in plugins and the entry point name for
    discovered ones.

    Attributes:
        strict_mode: If True, any plugin loading issue raises an error.
            If False, issues are emitted as warnings and loading continues.
        group: Entry point group scanned by `load_plugins`.
    """

    def __init__(self, strict: bool | None = None,
                 settings: Settings | None = None,
                 auto_load: bool | None = None) -> None:
        """Initialize the registry with built-in plugins.

        Args:
            strict: Whether to raise errors on plugin loading failures
                instead of emitting warnings. Defaults to settings.
            settings: Runtime settings, resolved from the environment
                when omitted.
            auto_load: Whether to discover entry point plugins right away.
                Defaults to settings.

        Raises:
            PluginError: If any loading issues occur on strict mode.
        """
        if settings is None:
            settings = Settings()

        self.strict_mode = settings.strict if strict is None else strict
        self.group = settings.plugins_group

        self.clear_plugins()
        self.add_plugin(required)

        if settings.load_plugins if auto_load is None else auto_load:
            self.load_plugins()

    def __contains__(self, name: object) -> bool:
        """Check whether a plugin is registered under a qualified or short name."""
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> 'Iterator[str]':
        """Iterate over qualified plugin names."""
        return iter(self.plugins)

    def get(self, name: str) -> Plugin | None:
        """Resolve a plugin by qualified name, or by short name.

        A short name resolves to the first registered plugin with
        that name.
        """
        if name in self.plugins:
            return self.plugins[name]

        for qualname, plugin in self.plugins.items():
            match = QUALNAME_PATTERN.match(qualname)
            if match is not None and match['name'] == name:
                return plugin

        return None

    def add_plugin(self, plugin: Plugin,
                   entrypoint: 'EntryPoint | None' = None) -> None:
        """Register a plugin.

        Args:
            plugin: Declarative plugin definition.
            entrypoint: Entry point from which the plugin was loaded,
                if applicable. Used for diagnostics and warnings.

        Raises:
            PluginError: If the plugin shadows another one on strict mode.
        """
        module, qualname = self.resolve_plugin_names(plugin, entrypoint)

        if qualname in self.plugins and (error := self.emit_plugin_issue(
            f'Plugin {qualname!r} from {module!r} is shadowing an existing',
            entrypoint,
        )):
            raise error

        self.plugins[qualname] = plugin

    @staticmethod
    def resolve_plugin_names(plugin: Plugin,
                             entrypoint: 'EntryPoint | None' = None) -> tuple[str, str]:
        """Resolve display names for a plugin.

        Args:
            plugin: Declarative plugin definition.
            entrypoint: Entry point from which the plugin was loaded, if applicable.

        Returns:
            Tuple with a module name and a qualified name for the plugin.
        """
        return (
            f'{entrypoint.value if entrypoint else plugin.__module__}',
            f'{entrypoint.name if entrypoint else BUILTINS_NAMESPACE}.{plugin.name}',
        )

    def emit_plugin_issue(self, message: str,
                          entrypoint: 'EntryPoint | None' = None) -> Exception | None:
        """Emit a plugin warning or return the exception.

        Args:
            message: Warning message to emit.
            entrypoint: Entry point from which the plugin was loaded, if applicable.

        Returns:
            PluginError on strict mode, otherwise `None`
                with producing a PluginWarning.
        """
        if self.strict_mode:
            return PluginError(message, entrypoint=entrypoint)

        warn(message, category=PluginWarning, stacklevel=2)

        return None

    def _load_plugin(self, entrypoint: 'EntryPoint') -> None:
        """Load and register a single plugin entry point.

        The entry point may refer either to a plugin or to an iterable
        of plugins.

        Args:
            entrypoint: Entry point describing the plugin to load.

        Raises:
            PluginError: If any loading issues occur on strict mode.
        """
        try:
            loaded = entrypoint.load()

        except ValidationError as base:
            if error := self.emit_plugin_issue(
                f'Failed to validate entrypoint {entrypoint.name!r}',
                entrypoint,
            ):
                raise error from base
            return None

        except Exception as base:
            if error := self.emit_plugin_issue(
                f'Failed to load entrypoint {entrypoint.name!r}',
                entrypoint,
            ):
                raise error from base
            return None

        plugins = loaded if isinstance(loaded, (list, tuple)) else (loaded,)

        for plugin in plugins:
            if not isinstance(plugin, Plugin):
                if error := self.emit_plugin_issue(
                    f'Loaded from entrypoint {entrypoint.name!r} object is not a plugin',
                    entrypoint,
                ):
                    raise error
                continue

            self.add_plugin(plugin, entrypoint)

    def clear_plugins(self) -> None:
        """Clear all registered plugins."""
        self.plugins: dict[str, Plugin] = {}

    def load_plugins(self) -> None:
        """Load plugins via entry points and register them.

        Raises:
            PluginError: If any loading issues occur on strict mode.
        """
        from importlib.metadata import entry_points  # noqa: PLC0415

        for entrypoint in entry_points().select(group=self.group):
            self._load_plugin(entrypoint)
