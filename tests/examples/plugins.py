"""Example plugin definitions for attrtree.

This module demonstrates how to declare plugins contributing options,
checks, and helpers to adopting schemas. It is intended for
documentation and testing purposes.
"""

from typing import TYPE_CHECKING

from attrtree.extensions import Plugin

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

if TYPE_CHECKING:
    from attrtree.schema import AttributeNode

#: Plugin reporting values outside of an inclusive range.
ranges = Plugin(name='ranges', description='Inclusive numeric ranges.')
ranges.option('minimum')
ranges.option('maximum')


@ranges.check(options=('minimum', 'maximum'))
def check_range(attribute: 'AttributeNode', options: 'Mapping[str, Any]') -> None:
    """Report numbers outside of the configured range."""
    if not isinstance(attribute.value, int | float):
        return

    if options['minimum'] is not None and attribute.value < options['minimum']:
        attribute.add_error(f'{attribute.full_path} must be at least {options["minimum"]}')

    if options['maximum'] is not None and attribute.value > options['maximum']:
        attribute.add_error(f'{attribute.full_path} must be at most {options["maximum"]}')


@ranges.helper
def clamp(attribute: 'AttributeNode', value: float) -> float:
    """Clamp a value to the configured range of an attribute."""
    minimum = attribute.option('minimum')
    maximum = attribute.option('maximum')

    if minimum is not None:
        value = max(value, minimum)
    if maximum is not None:
        value = min(value, maximum)

    return value


#: Plugin without options, applied to every adopting attribute.
trace = Plugin(name='trace')


@trace.check
def check_trace(attribute: 'AttributeNode', options: 'Mapping[str, Any]') -> None:  # noqa: ARG001
    """Record a note for every checked attribute."""
    attribute.add_note(f'checked {attribute.full_path or "<root>"}')


example = [ranges, trace]
