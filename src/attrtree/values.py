"""Core type definitions for attribute trees.

This module defines the value types accepted as input by the schema
engine and the key normalization rule applied to input mappings before
they are matched against declared attributes.
"""

from collections.abc import Callable, Mapping
from datetime import date, datetime, timedelta
from typing import Any

#: A value in runtime represents any Python object received from
#: application code prior to matching against a schema.
type RuntimeValue = Any

#: An option value is either a literal or a computed value. Computed
#: values are stored as is and interpreted by the consumer of the option.
type OptionValue = RuntimeValue | Callable[..., RuntimeValue]

MAPPINGS = (dict, Mapping)
SCALARS = (date, datetime, timedelta, str, bytes, int, float, bool)
SEQUENCES = (list, tuple, set)


def normalize_key(value: RuntimeValue) -> str:
    """Validate and normalize a mapping key.

    Every key is matched as a plain string: string subclasses (for
    example `StrEnum` members) are converted to their string value so
    a declared attribute matches an input key regardless of the key
    representation.

    Args:
        value: Candidate mapping key.

    Returns:
        The key as a plain string.

    Raises:
        TypeError: If the provided key is not a string.
    """
    if not isinstance(value, str):
        raise TypeError(f'Can not use {value!r} as mapping key')

    return str.__str__(value)


def normalize_keys(value: RuntimeValue) -> dict[str, RuntimeValue]:
    """Normalize the keys of an input mapping.

    Non-mapping values contribute no keys.

    Args:
        value: Raw input value.

    Returns:
        A new dictionary keyed by normalized keys, preserving input order.

    Raises:
        TypeError: If any key is not a string.
    """
    if not isinstance(value, MAPPINGS):
        return {}

    return {
        normalize_key(key): item
        for key, item in value.items()
    }
