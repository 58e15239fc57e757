"""Attribute trees built from schemas.

An `AttributeNode` is one materialized element of a tree: it holds the
raw input value found at its path, its child nodes, its visibility and
the issues collected while checking it.

Trees are built by `materialize`, which walks an input mapping against a
schema and produces one node per declared attribute and one node per
undeclared input key. Building a tree never runs checks; `check()` runs
the validation pipeline in place:

1. resolve visibility from the `visible` option;
2. run plugin checks, skipping plugins whose options are not set on the
   attribute schema;
3. run attribute-local checks;
4. check every child node.

Invisible nodes skip steps 2 and 3 but their children are still checked,
each with its own visibility.
"""

from collections.abc import Iterable, Mapping
from functools import partial
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from attrtree.context import CheckContext
from attrtree.errors import ROOT_MARKER, CheckFailedError
from attrtree.values import normalize_key, normalize_keys

from .declarations import VISIBLE_OPTION, UnknownAttribute
from .issues import Issue, IssueKind

if TYPE_CHECKING:
    from attrtree.values import OptionValue, RuntimeValue

    from .declarations import Schema

#: Path of the root node of every tree.
ROOT_PATH: tuple[str, ...] = ()


class AttributeNode:
    """Materialized attribute of a tree.

    Attributes:
        schema: Schema the node was built from.
        value: Raw input value at the node path.
        path: Names from the tree root to the node, empty for the root.
        present: Whether the key was present in the input. Declared
            attributes missing from the input get an empty mapping
            as their value and are not present.
        visible: Visibility resolved by `check()`, `True` until then.
        issues: Issues collected by `check()`.
    """

    def __init__(self, schema: 'Schema', value: 'RuntimeValue' = None,
                 path: Iterable[str] = ROOT_PATH, *, present: bool = True) -> None:
        """Initialize a node without children.

        Use `materialize` to build a complete tree.
        """
        self.schema = schema
        self.value = value
        self.path = tuple(path)
        self.present = present

        self.visible = True
        self.issues: list[Issue] = []

        self._children: dict[str, AttributeNode] = {}
        self._checked = False

    def __repr__(self) -> str:
        """String represenatation."""
        return f'<{type(self).__name__} {self.full_path or ROOT_MARKER} value={self.value!r}>'

    def __getattr__(self, name: str) -> Any:  # noqa: ANN401
        """Resolve helpers and children by attribute access.

        Helpers declared on the schema or its plugins take precedence
        over children. Children shadowed by regular node attributes
        (like `value` or `path`) are reachable through indexing only.
        """
        if name.startswith('_'):
            raise AttributeError(f'{type(self).__name__!r} object has no attribute {name!r}')

        schema = self.__dict__.get('schema')
        if schema is not None and (helper := schema.find_helper(name)) is not None:
            return partial(helper, self)

        children = self.__dict__.get('_children', {})
        if name in children:
            return children[name]

        raise AttributeError(f'{type(self).__name__!r} object has no attribute or child {name!r}')

    def __getitem__(self, key: str) -> 'AttributeNode':
        """Get a child node by name.

        Raises:
            KeyError: If there is no such child.
            TypeError: If the key is not a string.
        """
        return self._children[normalize_key(key)]

    def __contains__(self, key: object) -> bool:
        """Check whether a child node exists."""
        return isinstance(key, str) and normalize_key(key) in self._children

    def get(self, key: str, default: 'AttributeNode | None' = None) -> 'AttributeNode | None':
        """Get a child node by name, or a default."""
        if key in self:
            return self[key]

        return default

    @property
    def name(self) -> str | None:
        """Name of the attribute, `None` for the root node."""
        if not self.path:
            return None

        return self.path[-1]

    @property
    def root(self) -> bool:
        """Whether the node is the root of its tree."""
        return not self.path

    @property
    def full_path(self) -> str:
        """Dot-joined path of the node, empty for the root node."""
        return '.'.join(self.path)

    @property
    def children(self) -> Mapping[str, 'AttributeNode']:
        """Read-only view of child nodes by name."""
        return MappingProxyType(self._children)

    @property
    def unknown(self) -> bool:
        """Whether the node was built for an undeclared input key."""
        return self.schema is UnknownAttribute

    def deconstruct(self, keys: Iterable[str] | None = None) -> dict[str, 'AttributeNode | None']:
        """Expose children as a plain mapping for structural matching.

        Args:
            keys: Optional names to extract; missing children map to `None`.

        Returns:
            A new dictionary of child nodes by name.
        """
        if keys is None:
            return dict(self._children)

        return {
            key: self.get(key)
            for key in keys
        }

    def option(self, name: str) -> 'OptionValue':
        """Get an option value of the node schema, `None` if not set."""
        return self.schema.options.get(name)

    def add_issue(self, kind: IssueKind, message: str) -> Issue:
        """Record an issue for the node."""
        issue = Issue(kind=kind, name=self.name, message=message)
        self.issues.append(issue)

        return issue

    def add_error(self, message: str) -> Issue:
        """Record an error for the node."""
        return self.add_issue(IssueKind.ERROR, message)

    def add_warning(self, message: str) -> Issue:
        """Record a warning for the node."""
        return self.add_issue(IssueKind.WARNING, message)

    def add_note(self, message: str) -> Issue:
        """Record a note for the node."""
        return self.add_issue(IssueKind.NOTE, message)

    def _has_issues(self, kind: IssueKind | None = None) -> bool:
        if not self.visible:
            return False

        return any(
            kind is None or issue.kind == kind
            for issue in self.issues
        )

    @property
    def has_errors(self) -> bool:
        """Whether a visible node has errors of its own."""
        return self._has_issues(IssueKind.ERROR)

    @property
    def has_warnings(self) -> bool:
        """Whether a visible node has warnings of its own."""
        return self._has_issues(IssueKind.WARNING)

    @property
    def has_notes(self) -> bool:
        """Whether a visible node has notes of its own."""
        return self._has_issues(IssueKind.NOTE)

    @property
    def has_issues(self) -> bool:
        """Whether a visible node has any issues of its own."""
        return self._has_issues()

    @property
    def valid(self) -> bool:
        """Whether the node and all of its children have no errors.

        Invisible nodes are always valid.
        """
        if not self.visible:
            return True

        if self.has_errors:
            return False

        return all(child.valid for child in self._children.values())

    def check(self, **context: 'RuntimeValue') -> None:
        """Check the node and all of its children.

        Checking runs at most once per node, calling it again is a no-op.

        Args:
            **context: Values passed as keyword arguments to computed
                visibility options.

        Raises:
            CheckFailedError: If resolving visibility or any check raises.
                The error identifies the failing node; checking stops there.
        """
        self._check(CheckContext(context))

    def _check(self, context: CheckContext) -> None:
        if self._checked:
            return

        self._checked = True

        try:
            self._check_visibility(context)
            if self.visible:
                self._check_plugins()
            if self.visible:
                self._check_attribute()
        except CheckFailedError:
            raise
        except Exception as error:
            raise CheckFailedError.from_attribute(self, error) from error

        for child in self._children.values():
            child._check(context)  # noqa: SLF001

    def _check_visibility(self, context: CheckContext) -> None:
        option = self.schema.options.get(VISIBLE_OPTION)

        if isinstance(option, bool):
            self.visible = option
        elif callable(option):
            self.visible = bool(context.evaluate(option, self))

    def _check_plugins(self) -> None:
        options = self.schema.options

        for plugin in self.schema.plugins:
            # Plugins with options only apply to attributes setting one of them
            if plugin.options and not plugin.options.keys() & options.keys():
                continue

            for check in plugin.checks:
                if not self.visible:
                    return
                check(self, options)

    def _check_attribute(self) -> None:
        for check in self.schema.checks:
            check(self)

    @classmethod
    def build(cls, schema: 'Schema', value: 'RuntimeValue',
              path: Iterable[str] = ROOT_PATH, *, present: bool = True) -> 'AttributeNode':
        """Build a node and, recursively, all of its children.

        Args:
            schema: Schema of the node.
            value: Raw input value.
            path: Path of the node.
            present: Whether the value was present in the input.

        Returns:
            The built node.

        Raises:
            TypeError: If an input mapping matched against declared
                attributes contains non-string keys.
        """
        node = cls(schema, value, path, present=present)
        if not schema.attributes:
            return node

        values = normalize_keys(value)
        for name in dict.fromkeys((*schema.attributes, *values)):
            node._children[name] = cls.build(  # noqa: SLF001
                schema.attributes.get(name, UnknownAttribute),
                values.get(name, {}),
                (*node.path, name),
                present=name in values,
            )

        return node


def materialize(schema: 'Schema', value: 'RuntimeValue',
                path: Iterable[str] = ROOT_PATH) -> AttributeNode:
    """Build an attribute tree from a schema and an input value.

    Children are built for the union of declared attribute names (in
    declaration order) and input keys (in input order). Undeclared keys
    get the `UnknownAttribute` schema, missing keys get an empty mapping.

    Args:
        schema: Schema of the root node.
        value: Raw input value, usually a nested mapping.
        path: Path of the root node.

    Returns:
        Root node of the tree, not checked yet.

    Raises:
        TypeError: If an input mapping contains non-string keys.
    """
    return AttributeNode.build(schema, value, path)
