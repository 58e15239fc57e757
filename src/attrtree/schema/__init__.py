"""Schema declarations and attribute trees.

Declare a schema, feed it an input mapping, and check the resulting tree:

    schema = Schema().plugin(required)
    schema.attribute('id')
    tree = schema.new({'id': 123})
    tree.check()
    assert tree.valid

Children are reachable as `tree.id` or `tree['id']`. Children named like
node attributes (`name`, `value`, `path` and so on) are reachable by
indexing only: `tree['name']`.
"""

from .attributes import ROOT_PATH, AttributeNode, materialize
from .declarations import VISIBLE_OPTION, Schema, UnknownAttribute, UnknownSchema
from .issues import Issue, IssueKind

__all__ = (
    'ROOT_PATH',
    'VISIBLE_OPTION',
    'AttributeNode',
    'Issue',
    'IssueKind',
    'Schema',
    'UnknownAttribute',
    'UnknownSchema',
    'materialize',
)
