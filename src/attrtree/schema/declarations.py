"""Schema declaration layer.

A `Schema` is a type-level template for one level of an attribute tree:
it declares named child attributes (each a nested schema), configuration
options, attribute-local checks and helpers, and the plugins it adopts.

Schemas are built once and then used as read-only templates: feeding an
input mapping to a schema materializes a fresh tree of attribute nodes
(see `attrtree.schema.attributes`).

Deriving a schema from another one copies its plugins, options, child
attributes, checks, and helpers. The copy is independent: later changes to
the base never reach already derived schemas.
"""

from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError

from attrtree.errors import SchemaDefinitionError
from attrtree.names import Identifier
from attrtree.values import normalize_key

if TYPE_CHECKING:
    from typing import Self

if TYPE_CHECKING:
    from attrtree.extensions import Plugin
    from attrtree.schema.attributes import AttributeNode
    from attrtree.values import OptionValue, RuntimeValue

#: Option controlling attribute visibility.
VISIBLE_OPTION = 'visible'

#: Placeholder rendered for computed option values.
COMPUTED_PLACEHOLDER = '<computed>'

#: Attribute-local check, receives the attribute node.
type LocalCheck = Callable[['AttributeNode'], None]

_IDENTIFIER = TypeAdapter(Identifier)


class Schema:
    """Declaration of an attribute and its nested attributes.

    Attributes:
        name: Name of the attribute the schema was declared for,
            `None` for top-level schemas.
        plugins: Adopted plugins, unique by identity, in adoption order.
        options: Option values by name, literal or computed.
        attributes: Child attribute schemas by name, in declaration order.
        checks: Attribute-local checks, in declaration order.
        helpers: Attribute-local helper functions by name.
    """

    def __init__(self, base: 'Schema | None' = None, *,
                 name: str | None = None) -> None:
        """Initialize a schema, optionally derived from a base schema.

        Args:
            base: Schema to derive from.
            name: Optional attribute name of the schema.

        Raises:
            SchemaDefinitionError: If the base is not a schema.
        """
        if base is not None and not isinstance(base, Schema):
            raise SchemaDefinitionError(f'Can not derive a schema from {base!r}')

        self.name = name

        self.plugins: list[Plugin] = []
        self.options: dict[str, OptionValue] = {}
        self.attributes: dict[str, Schema] = {}
        self.checks: list[LocalCheck] = []
        self.helpers: dict[str, Callable[..., Any]] = {}

        if base is not None:
            self.plugins = list(base.plugins)
            self.options = dict(base.options)
            self.attributes = {
                key: Schema(attribute, name=attribute.name)
                for key, attribute in base.attributes.items()
            }
            self.checks = list(base.checks)
            self.helpers = dict(base.helpers)

    def __repr__(self) -> str:
        """String represenatation."""
        return f'<{type(self).__name__} {self.name or "root"!s} attributes={[*self.attributes]!r}>'

    def __getattr__(self, name: str) -> Callable[..., 'OptionValue']:
        """Resolve setters for options declared by adopted plugins.

        `schema.required(False)` is a shorthand for
        `schema.option('required', False)` once a plugin declaring the
        `required` option is adopted.
        """
        if not name.startswith('_'):
            for plugin in self.__dict__.get('plugins', ()):
                if name in plugin.options:
                    return partial(self.option, name)

        raise AttributeError(f'{type(self).__name__!r} object has no attribute {name!r}')

    def __call__(self, values: 'RuntimeValue' = None) -> 'AttributeNode':
        """Shorthand for `Schema.new`."""
        return self.new(values)

    @classmethod
    def derive(cls, base: 'Schema') -> 'Self':
        """Create an independent copy of a schema.

        Args:
            base: Schema to derive from.

        Returns:
            A new schema starting with copies of the base declarations.

        Raises:
            SchemaDefinitionError: If the base is not a schema.
        """
        return cls(base, name=getattr(base, 'name', None))

    def new(self, values: 'RuntimeValue' = None) -> 'AttributeNode':
        """Materialize an attribute tree for an input mapping.

        No checks are run: call `check()` on the returned node.

        Args:
            values: Input mapping, `None` is treated as an empty mapping.

        Returns:
            Root attribute node of the tree.

        Raises:
            TypeError: If the input contains non-string keys.
        """
        from attrtree.schema.attributes import materialize  # noqa: PLC0415

        return materialize(self, {} if values is None else values)

    def attribute(self, name: str, base: 'Schema | None' = None, /, *,
                  body: 'Callable[[Schema], Any] | None' = None,
                  **options: 'OptionValue') -> 'Schema':
        """Declare a child attribute.

        A child declared without a base starts empty and adopts every
        plugin currently adopted by this schema. A child derived from an
        existing schema keeps only that schema's plugins.

        Options are applied before the body, so values declared in the
        body win over keyword options.

        Args:
            name: Attribute name.
            base: Optional schema to derive the attribute from.
            body: Optional callable receiving the new schema to declare
                nested attributes, options, and checks.
            **options: Option values for the new attribute.

        Returns:
            The declared child schema.

        Raises:
            SchemaDefinitionError: If the base is not a schema or the
                name is not a string.
        """
        if base is not None and not isinstance(base, Schema):
            raise SchemaDefinitionError(
                f'Can not define attribute {name!r} from {base!r}, not a schema',
            )

        try:
            key = normalize_key(name)
        except TypeError as error:
            raise SchemaDefinitionError(f'Invalid attribute name {name!r}') from error

        definition = Schema(base, name=key)
        if base is None:
            definition.plugin(*self.plugins)

        for option, value in options.items():
            definition.option(option, value)

        if body is not None:
            body(definition)

        self.attributes[key] = definition

        return definition

    def plugin(self, *plugins: 'Plugin') -> 'Self':
        """Adopt plugins.

        Each plugin not adopted yet merges its option defaults into this
        schema. Adopting the same plugin again is a no-op.

        Args:
            *plugins: Plugins to adopt.

        Returns:
            The schema itself.
        """
        for plugin in plugins:
            if any(item is plugin for item in self.plugins):
                continue

            self.plugins.append(plugin)
            self.options.update(plugin.defaults())

        return self

    def option(self, name: str, value: 'OptionValue' = None) -> 'OptionValue':
        """Set an option.

        Args:
            name: Option name.
            value: Literal or computed value. `None` leaves the option as is.

        Returns:
            The current value of the option.
        """
        if value is not None:
            self.options[name] = value

        return self.options.get(name)

    def visible(self, value: 'bool | Callable[..., bool] | None' = None) -> 'OptionValue':
        """Set the visibility option.

        Args:
            value: A boolean, or a predicate receiving the attribute node
                and the check context as keyword arguments.

        Returns:
            The current value of the option.
        """
        return self.option(VISIBLE_OPTION, value)

    def check(self, func: LocalCheck) -> LocalCheck:
        """Declare an attribute-local check, directly or as a decorator.

        Raises:
            SchemaDefinitionError: If the check is not callable.
        """
        if not callable(func):
            raise SchemaDefinitionError(f'Check {func!r} is not callable')

        self.checks.append(func)

        return func

    def helper(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Declare an attribute-local helper, directly or as a decorator.

        The helper is callable on attribute nodes of this schema with the
        node passed as the first argument.

        Raises:
            SchemaDefinitionError: If the function name is not a valid
                identifier, for example for lambdas.
        """
        name = getattr(func, '__name__', None)
        try:
            self.helpers[_IDENTIFIER.validate_python(name)] = func
        except ValidationError as error:
            raise SchemaDefinitionError(f'Invalid helper name {name!r}') from error

        return func

    def find_helper(self, name: str) -> Callable[..., Any] | None:
        """Find a helper by name.

        Local helpers take precedence over plugin helpers, plugins are
        searched in adoption order.
        """
        if name in self.helpers:
            return self.helpers[name]

        for plugin in self.plugins:
            if name in plugin.helpers:
                return plugin.helpers[name]

        return None

    def describe(self) -> dict[str, Any]:
        """Describe the declaration as plain data.

        Computed option values are rendered as a placeholder.
        """
        description: dict[str, Any] = {}

        if self.plugins:
            description['plugins'] = [plugin.name for plugin in self.plugins]

        if self.options:
            description['options'] = {
                key: COMPUTED_PLACEHOLDER if callable(value) else value
                for key, value in self.options.items()
            }

        if self.checks:
            description['checks'] = len(self.checks)

        if self.attributes:
            description['attributes'] = {
                key: attribute.describe()
                for key, attribute in self.attributes.items()
            }

        return description


class UnknownSchema(Schema):
    """Schema of attributes present in the input but not declared.

    The schema has no attributes, options, checks or plugins and can not
    be extended.
    """

    def _frozen(self, *args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        raise SchemaDefinitionError('Unknown attribute schema can not be extended')

    attribute = plugin = check = helper = _frozen

    def option(self, name: str, value: 'OptionValue' = None) -> 'OptionValue':
        """Read an option, setting options is not allowed."""
        if value is not None:
            self._frozen()

        return self.options.get(name)


#: Built-in schema matched by every undeclared input key.
UnknownAttribute = UnknownSchema(name='unknown')
