"""Tests for the built-in required-value plugin."""

import pytest

from attrtree.builtins import required
from attrtree.schema import Schema
from tests.matchers import has_error


@pytest.fixture
def schema() -> Schema:
    """Provide a schema adopting the required plugin."""
    schema = Schema().plugin(required)
    schema.attribute('name')
    schema.attribute('nickname', required=False)
    schema.attribute('address', body=lambda attr: attr.attribute('street'))

    return schema


def test_defaults() -> None:
    """Merge required defaults into adopting schemas."""
    schema = Schema().plugin(required)

    assert schema.options == {
        'required': True,
        'required_message': "Required value for '{full_path}' is not set.",
    }


def test_missing_value(schema: Schema) -> None:
    """Report missing leaf values."""
    tree = schema.new({})
    tree.check()

    assert tree['name'].issues[0].message == "Required value for 'name' is not set."
    assert len(tree['name'].issues) == 1
    assert has_error(tree['address']['street'].issues, "Required value for 'address.street' is not set.")
    assert tree.valid is False


def test_none_value(schema: Schema) -> None:
    """Report leaf values explicitly set to `None`."""
    tree = schema.new({'name': None, 'address': {'street': 'Main'}})
    tree.check()

    assert has_error(tree['name'].issues, "Required value for 'name' is not set.")
    assert tree['address'].valid is True


def test_present_values(schema: Schema) -> None:
    """Accept present values, including falsy ones."""
    tree = schema.new({'name': '', 'address': {'street': 0}})
    tree.check()

    assert tree.valid is True
    assert tree['nickname'].issues == []


def test_containers_skipped(schema: Schema) -> None:
    """Skip attributes with children."""
    tree = schema.new({'name': 'Tom', 'address': None})
    tree.check()

    assert tree['address'].issues == []
    assert tree.issues == []
    assert has_error(tree['address']['street'].issues, "Required value for 'address.street' is not set.")


def test_custom_message() -> None:
    """Format custom required messages."""
    schema = Schema().plugin(required)
    schema.attribute('name', required_message='{full_path} is mandatory')

    tree = schema.new({})
    tree.check()

    assert has_error(tree['name'].issues, 'name is mandatory')


def test_required_setter() -> None:
    """Toggle the required option through the plugin option setter."""
    schema = Schema().plugin(required)
    schema.attribute('name', body=lambda attr: attr.required(False))

    tree = schema.new({})
    tree.check()

    assert tree.valid is True


def test_invisible_not_required() -> None:
    """Skip required checks of invisible attributes."""
    schema = Schema().plugin(required)
    schema.attribute('name', visible=lambda attr: attr.present)

    tree = schema.new({})
    tree.check()

    assert tree['name'].issues == []
    assert tree.valid is True


def test_child_shadowed_by_node_attribute(schema: Schema) -> None:
    """Reach children named like node attributes by indexing."""
    tree = schema.new({'nickname': 'bob'})
    tree.check()

    assert tree.name is None
    assert tree['name'].name == 'name'
    assert has_error(tree['name'].issues, "Required value for 'name' is not set.")
