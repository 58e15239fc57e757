"""Identifier rules for plugins and options.

Plugin and option names are part of the declaration surface: options
are addressed by name from schemas, checks and helpers, so they follow
the rules of Python identifiers restricted to ASCII.
"""

from re import ASCII
from re import compile as regexp
from typing import Annotated

from pydantic import Field

#: Base pattern for all identifiers.
#: Identifiers must start with a letter and may contain letters, digits, or underscores
_NAME_PATTERN = r'[a-zA-Z][\w]*'

#: Compiled pattern for qualified plugin names ("builtins.required", "acme-tools.ranges").
#: The namespace is an entry point name and may contain any characters.
QUALNAME_PATTERN = regexp(
    rf'^((?P<namespace>.+)\.)?(?P<name>{_NAME_PATTERN})$',
    flags=ASCII,
)

Identifier = Annotated[
    str, Field(
        pattern=rf'^{_NAME_PATTERN}$',
        title='Identifier',
        description=(
            'Name of a plugin, an option or a helper. '
            'Identifiers must start with a letter and may contain '
            'letters, digits, or underscores. '
            'Names are restricted to ASCII characters.'
        ),
        examples=[
            'required',
            'required_message',
        ],
    ),
]
