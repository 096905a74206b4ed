"""Catalog introspection: model, reader, schema selection and tree builder."""

from .builder import build, fetch_database, fetch_schema, fetch_relation
from .model import Column, Relation, Schema, Database, Introspection
from .reader import CatalogReader, RelationRef
from .selection import SchemaSelectionPolicy, select_schemas

__all__ = [
    "build",
    "fetch_database",
    "fetch_schema",
    "fetch_relation",
    "Column",
    "Relation",
    "Schema",
    "Database",
    "Introspection",
    "CatalogReader",
    "RelationRef",
    "SchemaSelectionPolicy",
    "select_schemas",
]
