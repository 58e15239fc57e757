"""Core exception hierarchy.

This module defines base error and warning types used across the library
to report plugin loading issues, schema declaration failures, and
exceptions raised while checking an attribute tree.

Validation findings are not exceptions: they are recorded as issues on
attribute nodes. Exceptions are reserved for broken declarations and for
checks that fail to run.
"""

from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict

from yaml import dump

from attrtree.values import MAPPINGS, SCALARS, SEQUENCES

if TYPE_CHECKING:
    from importlib.metadata import EntryPoint
    from typing import Self

if TYPE_CHECKING:
    from attrtree.schema.attributes import AttributeNode

#: Path marker used in messages for the root attribute of a tree.
ROOT_MARKER = '__root__'

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_INDENT = 2

FORMAT_REPLACER = '<runtime object>'
FORMAT_INDENT = 4


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Dotted path of the attribute the error is reported for.
    path: str | None

    #: Underlying exception that triggered formatting.
    error: Exception | None

    #: Raw value associated with the error.
    element: Any


class ErrorFormatter:
    """Utility class for formatting schema-related errors.

    This formatter is responsible for producing human-readable
    error messages with optional location and YAML-based
    contextual snippets.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        location = cls.get_location_string(context, indent=FORMAT_INDENT)
        snippet = cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)
        if not location and not snippet:
            return message

        return f'{message}{linesep}{location}{snippet}'

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string, including the underlying
            error when available.
        """
        indent = cls._ensure_indent(indent)

        message = ''
        if (path := context.get('path')) is not None:
            message += f'{indent}at {path!r}{linesep}'

        if (error := context.get('error')) is not None:
            message += f'{indent}caused by {type(error).__name__}: {error}{linesep}'

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a formatted snippet illustrating the failing value.

        Args:
            context: Error context containing the element.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no snippet data is available.
        """
        indent = cls._ensure_indent(indent)

        if 'element' not in context:
            return ''

        snippet = f'{indent}{SNIPPET_ELLIPSIS}'
        snippet += cls._make_yaml({'value': context['element']}, indent)
        snippet += linesep

        return snippet

    @classmethod
    def _filter_unsafe(cls, value: Any) -> Any:  # noqa: ANN401
        """Recursively sanitize values for safe YAML serialization.

        Non-scalar and non-container objects are replaced with
        a placeholder to prevent leaking opaque data.

        Args:
            value: Arbitrary value to sanitize.

        Returns:
            A YAML-safe representation of the value.
        """
        if value is None or isinstance(value, SCALARS):
            return value

        if isinstance(value, MAPPINGS):
            return {
                str(key): cls._filter_unsafe(item)
                for key, item in value.items()
            }

        if isinstance(value, SEQUENCES):
            return [
                cls._filter_unsafe(item)
                for item in value
            ]

        return FORMAT_REPLACER

    @classmethod
    def _make_yaml(cls, value: Any, indent: str = '') -> str:  # noqa: ANN401
        """Serialize a value to a YAML-formatted string.

        Args:
            value: Arbitrary value to serialize.
            indent: Optional indentation prefix.

        Returns:
            A YAML-formatted string representation of the value.
        """
        data = dump(
            cls._filter_unsafe(value),
            indent=SNIPPET_INDENT,
            sort_keys=False,
        )

        return cls._make_indent(data, indent)

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string.

        Empty or whitespace-only lines are omitted.
        """
        if not indent:
            return value

        return linesep.join(
            f'{indent}{line}'
            for line in value.splitlines()
            if line.strip()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation input."""
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class PluginWarning(UserWarning):
    """Warning emitted for non-fatal plugin-related issues.

    This warning is used when a plugin cannot be loaded or registered,
    but the error does not prevent further execution (for example,
    when running in non-strict mode).
    """


class SchemaError(Exception, ErrorFormatter):
    """Base exception for all attrtree errors.

    All custom exceptions raised by the library inherit from this class
    to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing optional runtime values.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String represenatation."""
        return self.format(self.message, self.context)


class PluginError(SchemaError):
    """Error raised for fatal plugin-related failures.

    This exception is raised when a plugin entry point is invalid,
    misconfigured, or fails to load in strict mode.
    """

    def __init__(self, message: str, *,
                 entrypoint: 'EntryPoint | None' = None) -> None:
        """Initialize a plugin error.

        Args:
            message: Human-readable error description.
            entrypoint: Optional plugin entry point associated with the error.
        """
        self.entrypoint = entrypoint

        super().__init__(message)


class SchemaDefinitionError(SchemaError):
    """Error raised while declaring a schema.

    Declaration errors are not recovered: they abort the schema setup,
    for example when an attribute is derived from an object that is not
    a schema.
    """


class CheckFailedError(SchemaError):
    """Error raised when checking an attribute fails unexpectedly.

    Wraps any exception raised by visibility resolution or by a check.
    The failing attribute stays reachable from the error, the original
    exception is chained as `__cause__`.
    """

    def __init__(self, attribute: 'AttributeNode', *,
                 context: ErrorContext | None = None) -> None:
        """Initialize a check error.

        Args:
            attribute: Attribute node whose check failed.
            context: Error context containing optional runtime values.
        """
        self.attribute = attribute
        self.path = ROOT_MARKER if attribute.root else attribute.full_path

        super().__init__(f'Attribute check failed for {self.path!r}', context=context)

    @classmethod
    def from_attribute(cls, attribute: 'AttributeNode',
                       error: Exception | None = None) -> 'Self':
        """Create an error for a failed attribute check.

        Args:
            attribute: Attribute node whose check failed.
            error: Optional underlying exception.

        Returns:
            CheckFailedError with the attribute value attached as a snippet.
        """
        return cls(attribute, context=ErrorContext(
            error=error,
            element=attribute.value,
        ))
