"""Declarative schemas for nested mappings.

The `attrtree` package builds validated, introspectable trees from
arbitrary nested mappings such as parsed configuration or request
payloads.

Key features:
- schemas declaring nested attributes, options, and checks, with
  copy-on-derive inheritance;
- plugins contributing reusable options, checks, and helpers to every
  attribute adopting them;
- trees mirroring the input shape, including undeclared keys;
- a staged check pipeline with visibility short-circuiting, recording
  findings as issues instead of raising.
"""

from attrtree.errors import CheckFailedError, PluginError, SchemaDefinitionError, SchemaError
from attrtree.extensions import Option, Plugin, PluginCheck
from attrtree.schema import AttributeNode, Issue, IssueKind, Schema, UnknownAttribute, materialize

__all__ = (
    'AttributeNode',
    'CheckFailedError',
    'Issue',
    'IssueKind',
    'Option',
    'Plugin',
    'PluginCheck',
    'PluginError',
    'Schema',
    'SchemaDefinitionError',
    'SchemaError',
    'UnknownAttribute',
    'materialize',
)
