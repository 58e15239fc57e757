"""Host-provided context for attribute checks.

The context is a mapping of names to arbitrary values supplied by the
caller of `AttributeNode.check`. It is forwarded as keyword arguments
to computed option values such as visibility predicates. Computed values
taking no parameters are called without arguments.
"""

from inspect import signature
from typing import TYPE_CHECKING

from attrtree.values import RuntimeValue

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from attrtree.schema.attributes import AttributeNode


class CheckContext(dict[str, RuntimeValue]):
    """Execution context shared by all nodes of one `check()` pass.

    Context instances are expected to be immutable in practice, although
    this is not strictly enforced at the type level.
    """

    def evaluate(self, value: 'Callable[..., RuntimeValue]',
                 attribute: 'AttributeNode') -> RuntimeValue:
        """Evaluate a computed option value for an attribute.

        Callables without parameters are called with no arguments. Others
        receive the attribute node, followed by the context as keyword
        arguments.

        Args:
            value: Computed option value.
            attribute: Attribute node the value is computed for.

        Returns:
            The value returned by the callable.

        Raises:
            Any exception raised by the callable.
        """
        try:
            parameters = signature(value).parameters
        except (TypeError, ValueError):
            parameters = None

        if parameters is not None and not parameters:
            return value()

        return value(attribute, **self)
