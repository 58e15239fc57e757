"""Built-in required-value plugin.

Adopting the plugin makes every leaf attribute required by default:
an attribute without children whose value is missing from the input
or explicitly `None` gets an error. Set the `required` option to
`False` to make an attribute optional.
"""

from typing import TYPE_CHECKING

from attrtree.extensions import Plugin

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

if TYPE_CHECKING:
    from attrtree.schema import AttributeNode

REQUIRED_MESSAGE = "Required value for '{full_path}' is not set."

required = Plugin(
    name='required',
    title='Required values',
    description='Reports leaf attributes without a value.',
)
required.option(
    'required',
    default=True,
    description='Whether the attribute must have a value.',
)
required.option(
    'required_message',
    default=REQUIRED_MESSAGE,
    description='Error message template, formatted with `full_path`.',
)


@required.check(options=('required', 'required_message'))
def check_required(attribute: 'AttributeNode', options: 'Mapping[str, Any]') -> None:
    """Report a leaf attribute without a value."""
    if not options['required']:
        return

    if attribute.children:
        return

    if attribute.present and attribute.value is not None:
        return

    message = options['required_message'] or REQUIRED_MESSAGE
    attribute.add_error(message.format(full_path=attribute.full_path))
