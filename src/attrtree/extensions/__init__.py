"""Declarative plugin definition.

A plugin is a reusable bundle of named options, checks, and helper
functions that any schema can adopt. Adopting a plugin merges its
option defaults into the schema, runs its checks against every node
built from the schema, and makes its helpers callable on those nodes.

The plugin model itself is purely declarative: it holds no state about
the schemas adopting it, so one plugin object can be shared by any
number of unrelated schemas.
"""

from collections.abc import Callable, Iterable
from typing import Any

from pydantic import Field, TypeAdapter

from attrtree.models import DescribedMixin
from attrtree.names import Identifier

from .checks import CheckRunner, PluginCheck
from .options import Option

__all__ = (
    'CheckRunner',
    'Option',
    'Plugin',
    'PluginCheck',
)

_IDENTIFIER = TypeAdapter(Identifier)


class Plugin(DescribedMixin):
    """Declarative container for reusable options and checks.

    Plugins compare and hash by identity: adopting the same plugin
    object twice is a no-op, while two plugins with equal contents
    are still distinct.
    """

    name: Identifier = Field(
        title='Plugin name',
        description=(
            'Logical name of the plugin. '
            'Used for identification, diagnostics, and conflict detection.'
        ),
    )

    options: dict[Identifier, Option] = Field(
        default_factory=dict,
        title='Options',
        description=(
            'Options made available to adopting schemas. A plugin declaring '
            'options only runs its checks on attributes setting at least '
            'one of them.'
        ),
    )

    checks: list[PluginCheck] = Field(
        default_factory=list,
        title='Checks',
        description='Checks run, in declaration order, against adopting attributes.',
    )

    helpers: dict[Identifier, Callable[..., Any]] = Field(
        default_factory=dict,
        title='Helpers',
        description=(
            'Functions callable on every attribute node of an adopting schema. '
            'The node is passed as the first argument.'
        ),
    )

    def __eq__(self, other: object) -> bool:
        """Compare plugins by identity."""
        return self is other

    def __hash__(self) -> int:
        """Hash plugins by identity."""
        return id(self)

    def option(self, name: str, default: Any = None, *,  # noqa: ANN401
               title: str | None = None,
               description: str | None = None) -> Option:
        """Declare an option.

        Args:
            name: Option name.
            default: Optional default value merged into adopting schemas.
            title: Optional short title.
            description: Optional description.

        Returns:
            The declared option.

        Raises:
            ValidationError: If the name is not a valid identifier.
        """
        option = Option(default=default, title=title, description=description)
        self.options[_IDENTIFIER.validate_python(name)] = option

        return option

    def check(self, runner: CheckRunner | None = None, /, *,
              options: Iterable[str] = ()) -> Any:  # noqa: ANN401
        """Declare a check, directly or as a decorator.

        Args:
            runner: Check function. When omitted a decorator is returned.
            options: Names of the option values passed to the runner.

        Returns:
            The runner itself, or a decorator registering the runner.
        """
        def register(func: CheckRunner) -> CheckRunner:
            self.checks.append(PluginCheck(runner=func, options=tuple(options)))
            return func

        if runner is None:
            return register

        return register(runner)

    def helper(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Declare a helper function named after the function itself."""
        self.helpers[_IDENTIFIER.validate_python(func.__name__)] = func
        return func

    def add_helpers(self, **helpers: Callable[..., Any]) -> None:
        """Declare a bundle of helper functions by name."""
        for name, func in helpers.items():
            self.helpers[_IDENTIFIER.validate_python(name)] = func

    def defaults(self) -> dict[str, Any]:
        """Return the option defaults merged into adopting schemas.

        Options without a default are not pre-populated.
        """
        return {
            name: option.default
            for name, option in self.options.items()
            if option.default is not None
        }
