"""Declarative plugin option definitions."""

from typing import Any

from pydantic import Field

from attrtree.models import DescribedMixin


class Option(DescribedMixin):
    """Declarative option definition.

    An option is a named configuration value that a plugin makes
    available to every schema adopting it. Options with a default value
    are pre-populated on adoption; options without one are only present
    on schemas that set them explicitly.
    """

    default: Any = Field(
        default=None,
        title='Default value',
        description=(
            'Value merged into the options of every adopting schema. '
            '`None` means the option has no default and is not pre-populated.'
        ),
    )
