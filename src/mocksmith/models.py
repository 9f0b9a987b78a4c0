"""
Core data models for the mocksmith package.

Defines the parameter declarations producers publish, and the schema
structures (columns, tables, relationships) the relational seeder consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple

from mocksmith.errors import InternalError, SchemaError


class ParamType(str, Enum):
    """Declared parameter types."""
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    SELECT = "select"
    STRING_LIST = "string-list"

    @classmethod
    def parse(cls, value: str) -> ParamType:
        """Parse a type name, accepting ``string_slice`` / ``string_list`` spellings."""
        normalized = value.strip().lower().replace("_", "-")
        if normalized == "string-slice":
            normalized = "string-list"
        return cls(normalized)


@dataclass
class ParameterDef:
    """Declaration of a single producer parameter."""
    name: str
    type: ParamType
    description: str = ""
    required: bool = False
    default: Optional[Any] = None
    options: Optional[List[str]] = None  # select only
    min: Optional[Any] = None
    max: Optional[Any] = None
    example: Optional[Any] = None

    def __post_init__(self):
        if isinstance(self.type, str):
            self.type = ParamType.parse(self.type)
        if self.type == ParamType.SELECT and not self.options:
            raise InternalError(f"select parameter '{self.name}' declares no options")
        for bound in ("min", "max"):
            value = getattr(self, bound)
            if value is None:
                continue
            if self.type == ParamType.INT and not (isinstance(value, int) and not isinstance(value, bool)):
                raise InternalError(f"parameter '{self.name}' {bound} must be an int")
            if self.type == ParamType.FLOAT:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise InternalError(f"parameter '{self.name}' {bound} must be a float")
                setattr(self, bound, float(value))
            if self.type not in (ParamType.INT, ParamType.FLOAT):
                raise InternalError(f"parameter '{self.name}' of type {self.type.value} cannot declare {bound}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "type": self.type.value,
            "description": self.description,
            "required": self.required,
            "default": self.default,
            "options": self.options,
            "min": self.min,
            "max": self.max,
            "example": self.example,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ParameterDef:
        """Create from dictionary."""
        return cls(
            name=data["name"],
            type=ParamType.parse(data["type"]),
            description=data.get("description", ""),
            required=data.get("required", False),
            default=data.get("default"),
            options=data.get("options"),
            min=data.get("min"),
            max=data.get("max"),
            example=data.get("example"),
        )


@dataclass
class GeneratorInfo:
    """Description of a producer and the parameters it accepts."""
    industry: str
    name: str
    description: str = ""
    example: Optional[Any] = None
    parameters: List[ParameterDef] = field(default_factory=list)

    def __post_init__(self):
        seen: Set[str] = set()
        for param in self.parameters:
            if param.name in seen:
                raise InternalError(
                    f"generator {self.industry}/{self.name} declares parameter '{param.name}' twice"
                )
            if param.name.startswith("_"):
                raise InternalError(
                    f"generator {self.industry}/{self.name} declares reserved parameter '{param.name}'"
                )
            seen.add(param.name)

    def get_parameter(self, name: str) -> Optional[ParameterDef]:
        """Get a parameter declaration by name."""
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "industry": self.industry,
            "name": self.name,
            "description": self.description,
            "example": self.example,
            "parameters": [p.to_dict() for p in self.parameters],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GeneratorInfo:
        """Create from dictionary."""
        return cls(
            industry=data["industry"],
            name=data["name"],
            description=data.get("description", ""),
            example=data.get("example"),
            parameters=[ParameterDef.from_dict(p) for p in data.get("parameters", [])],
        )


@dataclass(frozen=True)
class ForeignRef:
    """Target of a foreign-key column."""
    table: str
    column: str

    @property
    def key(self) -> str:
        return f"{self.table}.{self.column}"


@dataclass
class Column:
    """A schema column bound to a producer."""
    name: str
    type: str = "string"
    industry: str = "base"
    generator: str = "word"
    params: Dict[str, Any] = field(default_factory=dict)
    is_foreign: bool = False
    foreign_ref: Optional[ForeignRef] = None
    is_primary_key: bool = False
    nested_fields: List[Column] = field(default_factory=list)

    def __post_init__(self):
        if self.is_foreign and (
            self.foreign_ref is None or not self.foreign_ref.table or not self.foreign_ref.column
        ):
            raise SchemaError(
                "foreign column must reference a table and column",
                column=self.name,
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "type": self.type,
            "industry": self.industry,
            "generator": self.generator,
            "params": dict(self.params),
            "is_foreign": self.is_foreign,
            "foreign_ref": (
                {"table": self.foreign_ref.table, "column": self.foreign_ref.column}
                if self.foreign_ref else None
            ),
            "is_primary_key": self.is_primary_key,
            "nested_fields": [c.to_dict() for c in self.nested_fields],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Column:
        """Create from dictionary."""
        ref = data.get("foreign_ref")
        return cls(
            name=data["name"],
            type=data.get("type", "string"),
            industry=data.get("industry", "base"),
            generator=data.get("generator", "word"),
            params=dict(data.get("params") or {}),
            is_foreign=data.get("is_foreign", False),
            foreign_ref=ForeignRef(ref["table"], ref["column"]) if ref else None,
            is_primary_key=data.get("is_primary_key", False),
            nested_fields=[Column.from_dict(c) for c in data.get("nested_fields", [])],
        )


@dataclass
class Table:
    """A table to seed."""
    name: str
    columns: List[Column] = field(default_factory=list)
    row_count: int = 0
    seed_rows: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def column_names(self) -> List[str]:
        """Return list of column names."""
        return [c.name for c in self.columns]

    @property
    def total_rows(self) -> int:
        """Rows a seeder run produces: row_count, or more when seed_rows outnumber it."""
        return max(self.row_count, len(self.seed_rows))

    def get_column(self, name: str) -> Optional[Column]:
        """Get column by name."""
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def get_primary_key(self) -> Optional[Column]:
        """Get the primary key column, if any."""
        for col in self.columns:
            if col.is_primary_key:
                return col
        return None

    def get_fk_columns(self) -> List[Column]:
        """Get foreign key columns."""
        return [c for c in self.columns if c.is_foreign]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "columns": [c.to_dict() for c in self.columns],
            "row_count": self.row_count,
            "seed_rows": [dict(r) for r in self.seed_rows],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Table:
        """Create from dictionary."""
        return cls(
            name=data["name"],
            columns=[Column.from_dict(c) for c in data.get("columns", [])],
            row_count=data.get("row_count", 0),
            seed_rows=[dict(r) for r in data.get("seed_rows", [])],
        )


@dataclass(frozen=True)
class Relationship:
    """A foreign key edge: child_table.child_column -> parent_table.parent_column."""
    child_table: str
    child_column: str
    parent_table: str
    parent_column: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "child_table": self.child_table,
            "child_column": self.child_column,
            "parent_table": self.parent_table,
            "parent_column": self.parent_column,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Relationship:
        """Create from dictionary."""
        return cls(
            child_table=data["child_table"],
            child_column=data["child_column"],
            parent_table=data["parent_table"],
            parent_column=data["parent_column"],
        )


@dataclass
class Schema:
    """A set of related tables and the foreign keys between them."""
    tables: List[Table] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)

    def get_table(self, name: str) -> Optional[Table]:
        """Get table by name."""
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def add_relationship(self, rel: Relationship) -> None:
        """Add a relationship unless an identical one is already present."""
        if rel not in self.relationships:
            self.relationships.append(rel)

    def foreign_keys(self) -> List[Relationship]:
        """
        Every foreign key edge in the schema.

        Explicit relationships come first, followed by one edge per foreign
        column that no relationship already covers.
        """
        edges = list(self.relationships)
        for table in self.tables:
            for col in table.get_fk_columns():
                rel = Relationship(table.name, col.name, col.foreign_ref.table, col.foreign_ref.column)
                if rel not in edges:
                    edges.append(rel)
        return edges

    def get_parent_tables(self, table_name: str) -> List[str]:
        """Get all parent tables (tables this table depends on via FK)."""
        parents = []
        for rel in self.foreign_keys():
            if rel.child_table == table_name and rel.parent_table not in parents:
                parents.append(rel.parent_table)
        return parents

    def get_child_tables(self, table_name: str) -> List[str]:
        """Get all child tables (tables that depend on this table via FK)."""
        children = []
        for rel in self.foreign_keys():
            if rel.parent_table == table_name and rel.child_table not in children:
                children.append(rel.child_table)
        return children

    def reference_targets(self, table_name: str) -> List[str]:
        """
        Columns of a table whose values must be memoized for children.

        The primary key always comes first, followed by any other column a
        foreign key points at, in declaration order.
        """
        table = self.get_table(table_name)
        if table is None:
            return []
        referenced = {rel.parent_column for rel in self.foreign_keys() if rel.parent_table == table_name}
        targets = []
        pk = table.get_primary_key()
        if pk is not None:
            targets.append(pk.name)
        for col in table.columns:
            if col.name in referenced and col.name not in targets:
                targets.append(col.name)
        return targets

    def dependency_order(self) -> List[str]:
        """
        Topologically sort tables so every parent precedes its children.

        Ties are broken by table name. A cycle raises SchemaError naming it.
        """
        names = [t.name for t in self.tables]
        in_degree: Dict[str, int] = {t: 0 for t in names}
        adj: Dict[str, List[str]] = {t: [] for t in names}
        edges: Set[Tuple[str, str]] = set()

        for rel in self.foreign_keys():
            parent, child = rel.parent_table, rel.child_table
            if parent not in in_degree or child not in in_degree:
                continue
            if (parent, child) in edges:
                continue
            edges.add((parent, child))
            adj[parent].append(child)
            in_degree[child] += 1

        # Kahn's algorithm
        queue = [t for t in names if in_degree[t] == 0]
        result = []

        while queue:
            queue.sort()
            node = queue.pop(0)
            result.append(node)

            for neighbor in adj[node]:
                in_degree[neighbor] -= 1
                if in_degree[neighbor] == 0:
                    queue.append(neighbor)

        if len(result) != len(names):
            remaining = sorted(set(names) - set(result))
            cycle = self._find_cycle(remaining, adj)
            raise SchemaError(
                "circular foreign key dependency: " + " -> ".join(cycle),
                table=cycle[0] if cycle else None,
            )

        return result

    @staticmethod
    def _find_cycle(nodes: List[str], adj: Dict[str, List[str]]) -> List[str]:
        """Return one cycle among ``nodes`` as a closed path (first == last)."""
        candidates = set(nodes)
        for start in nodes:
            path = [start]
            on_path = {start}

            def visit(node: str) -> Optional[List[str]]:
                for neighbor in sorted(adj[node]):
                    if neighbor not in candidates:
                        continue
                    if neighbor in on_path:
                        return path[path.index(neighbor):] + [neighbor]
                    path.append(neighbor)
                    on_path.add(neighbor)
                    found = visit(neighbor)
                    if found:
                        return found
                    on_path.discard(path.pop())
                return None

            found = visit(start)
            if found:
                return found
        return list(nodes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "tables": [t.to_dict() for t in self.tables],
            "relationships": [r.to_dict() for r in self.relationships],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Schema:
        """Create from dictionary."""
        return cls(
            tables=[Table.from_dict(t) for t in data.get("tables", [])],
            relationships=[Relationship.from_dict(r) for r in data.get("relationships", [])],
        )
