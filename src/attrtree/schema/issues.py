"""Validation issue records.

Issues are the normal outcome of a failed validation rule. They are
plain immutable records accumulated on attribute nodes, never raised.
"""

from enum import StrEnum

from pydantic import Field

from attrtree.models import SchemaModel


class IssueKind(StrEnum):
    """Severity of a validation issue."""

    ERROR = 'error'
    WARNING = 'warning'
    NOTE = 'note'


class Issue(SchemaModel):
    """Immutable validation finding for a single attribute."""

    kind: IssueKind = Field(
        title='Issue kind',
        description='Severity of the finding.',
    )

    name: str | None = Field(
        title='Attribute name',
        description='Name of the attribute the issue originates from, `None` for the root.',
    )

    message: str = Field(
        title='Message',
        description='Human-readable description of the finding.',
    )
