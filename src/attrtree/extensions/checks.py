"""Declarative plugin check definitions.

A plugin check is a callable run against every attribute node whose
schema adopts the plugin. The check explicitly declares which option
values it needs; only these are resolved and passed to the runner.
"""

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import Field

from attrtree.models import SchemaModel
from attrtree.names import Identifier  # noqa: TC001

if TYPE_CHECKING:
    from attrtree.schema.attributes import AttributeNode

#: The runner receives the attribute node and a mapping of the option
#: values it declared. Findings are recorded on the node as issues.
type CheckRunner = Callable[[Any, Mapping[str, Any]], None]


class PluginCheck(SchemaModel):
    """Declarative check contributed by a plugin."""

    runner: CheckRunner = Field(
        title='Check function',
        description=(
            'Callable implementing the check logic. Receives the attribute '
            'node and a mapping with the requested option values.'
        ),
    )

    options: tuple[Identifier, ...] = Field(
        default=(),
        title='Requested options',
        description=(
            'Names of the options passed to the runner. Options that are '
            'not set on the schema are passed as `None`.'
        ),
    )

    def __call__(self, attribute: 'AttributeNode',
                 options: Mapping[str, Any]) -> None:
        """Run the check against an attribute.

        Args:
            attribute: Attribute node being checked.
            options: Resolved options of the attribute schema.

        Raises:
            Any exception raised by the runner.
        """
        self.runner(attribute, {
            name: options.get(name)
            for name in self.options
        })
