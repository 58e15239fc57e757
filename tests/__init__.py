"""Test suite for the attrtree package.

This package contains unit and integration tests validating schema
declarations, tree materialization, the check pipeline, plugins, and
the command-line utilities.
"""
