"""CLI utilities for attrtree schema and plugin introspection."""

from importlib import import_module

from click import BadParameter, argument, echo, group, option
from yaml import dump

from attrtree.core import PluginRegistry
from attrtree.schema import Schema
from attrtree.schema.declarations import COMPUTED_PLACEHOLDER

YAML_INDENT = 2


def _render(value: object) -> str:
    """Render plain data as YAML."""
    return dump(value, indent=YAML_INDENT, sort_keys=False, allow_unicode=True)


def _import_schema(reference: str) -> Schema:
    """Import a schema object from a `module:attribute` reference.

    Args:
        reference: Import reference, for example `myapp.schemas:config`.

    Returns:
        The referenced schema.

    Raises:
        BadParameter: If the reference is malformed, can not be
            imported, or does not point to a schema.
    """
    module_name, _, attribute = reference.partition(':')
    if not module_name or not attribute:
        raise BadParameter(f'expected MODULE:ATTRIBUTE, got {reference!r}')

    try:
        value = import_module(module_name)
        for part in attribute.split('.'):
            value = getattr(value, part)
    except (ImportError, AttributeError) as error:
        raise BadParameter(f'can not import {reference!r}: {error}') from error

    if not isinstance(value, Schema):
        raise BadParameter(f'{reference!r} is not a schema')

    return value


@group(help='Command-line utilities for attrtree schemas.')
def cli() -> None:
    """Root CLI group for attrtree tools."""
    return None


@cli.command(
    name='plugins',
    help='List available plugins with their options and default values.',
)
@option(
    '--strict/--relaxed',
    default=None,
    help='Fail on plugin loading issues instead of warning.',
)
def list_plugins(strict: bool | None) -> None:
    """Print registered plugins as YAML."""
    registry = PluginRegistry(strict=strict)

    echo(_render({
        qualname: {
            'description': plugin.description,
            'options': {
                name: COMPUTED_PLACEHOLDER if callable(item.default) else item.default
                for name, item in plugin.options.items()
            },
            'checks': len(plugin.checks),
            'helpers': sorted(plugin.helpers),
        }
        for qualname, plugin in registry.plugins.items()
    }), nl=False)


@cli.command(
    name='describe',
    help='Print the declaration of a schema referenced as MODULE:ATTRIBUTE.',
)
@argument('reference')
def describe_schema(reference: str) -> None:
    """Print a schema declaration as YAML."""
    echo(_render(_import_schema(reference).describe()), nl=False)


if __name__ == '__main__':
    cli()
