"""Introspected catalog model.

All entities are frozen and hold tuples, so a built tree can be handed to
consumers as a read-only snapshot.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Column:
    """Column metadata."""

    name: str
    type_id: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type_id": self.type_id}

    def __repr__(self) -> str:
        return f"Column({self.name}, {self.type_id})"


@dataclass(frozen=True)
class Relation:
    """Table or view metadata, columns in attribute order."""

    name: str
    columns: Tuple[Column, ...] = ()

    def get_column(self, name: str) -> Optional[Column]:
        """Get column by name."""
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "columns": [col.to_dict() for col in self.columns],
        }

    def __repr__(self) -> str:
        return f"Relation({self.name}, cols={len(self.columns)})"


@dataclass(frozen=True)
class Schema:
    """Schema metadata, relations in catalog order."""

    name: str
    relations: Tuple[Relation, ...] = ()

    def get_relation(self, name: str) -> Optional[Relation]:
        """Get relation by name."""
        for relation in self.relations:
            if relation.name == name:
                return relation
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "relations": [relation.to_dict() for relation in self.relations],
        }

    def __repr__(self) -> str:
        return f"Schema({self.name}, relations={len(self.relations)})"


@dataclass(frozen=True)
class Database:
    """Root of the tree, schemas in selection order."""

    name: str
    schemas: Tuple[Schema, ...] = ()

    def get_schema(self, name: str) -> Optional[Schema]:
        """Get schema by name."""
        for schema in self.schemas:
            if schema.name == name:
                return schema
        return None

    def flatten_relations(self) -> List[Relation]:
        """Concatenate the relations of every schema, in schema order.

        Nothing is re-sorted or deduplicated.
        """
        relations: List[Relation] = []
        for schema in self.schemas:
            relations.extend(schema.relations)
        return relations

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "schemas": [schema.to_dict() for schema in self.schemas],
        }

    def __repr__(self) -> str:
        return f"Database({self.name}, schemas={len(self.schemas)})"


@dataclass(frozen=True)
class Introspection:
    """Result of a successful introspection build."""

    database: Database

    def flatten_relations(self) -> List[Relation]:
        return self.database.flatten_relations()

    def to_dict(self) -> Dict[str, Any]:
        return {"database": self.database.to_dict()}
