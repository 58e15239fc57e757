"""Plugin discovery infrastructure.

The primary public entry point is `PluginRegistry`, which registers the
built-in plugins and loads third-party plugins exposed through the
`attrtree_plugins` entry point group.
"""

from .loader import BUILTINS_NAMESPACE, PluginRegistry

__all__ = (
    'BUILTINS_NAMESPACE',
    'PluginRegistry',
)
