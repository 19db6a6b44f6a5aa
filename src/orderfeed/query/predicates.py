"""Typed predicate clauses rendered to parameterized SQL.

Clauses are accumulated as objects and rendered once the query is assembled.
User-controlled values are always bind parameters. Only values that pass the
literal charset guard may be rendered inline.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from sqlalchemy.types import TypeEngine

SAFE_LITERAL = re.compile(r"[A-Za-z0-9_\-]*")


@dataclass(frozen=True)
class Bind:
    """A named bind parameter."""
    name: str

    def render(self) -> str:
        return f":{self.name}"


@dataclass(frozen=True)
class Const:
    """An inlined literal. Only charset-restricted strings and numbers are accepted."""
    value: Union[str, int]

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (str, int)):
            raise ValueError(f"Unsupported literal type: {type(self.value).__name__}")
        if isinstance(self.value, str) and not SAFE_LITERAL.fullmatch(self.value):
            raise ValueError(f"Refusing to inline literal outside allowed charset: {self.value!r}")

    def render(self) -> str:
        if isinstance(self.value, int):
            return str(self.value)
        return f"'{self.value}'"


Operand = Union[Bind, Const]


class Predicate:
    def render(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Compare(Predicate):
    column: str
    op: str
    operand: Operand

    def render(self) -> str:
        return f"{self.column} {self.op} {self.operand.render()}"


@dataclass(frozen=True)
class InList(Predicate):
    column: str
    operands: Tuple[Operand, ...]

    def __post_init__(self):
        if not self.operands:
            raise ValueError(f"Empty IN list for {self.column}")

    def render(self) -> str:
        values = ", ".join(operand.render() for operand in self.operands)
        return f"{self.column} IN ({values})"


@dataclass(frozen=True)
class IsNull(Predicate):
    column: str

    def render(self) -> str:
        return f"{self.column} IS NULL"


@dataclass(frozen=True)
class TupleCompare(Predicate):
    """Lexicographic row-value comparison, e.g. (price, id) > (:k, :id)."""
    columns: Tuple[str, ...]
    op: str
    operands: Tuple[Operand, ...]

    def __post_init__(self):
        if len(self.columns) != len(self.operands):
            raise ValueError("Tuple comparison needs one operand per column")

    def render(self) -> str:
        left = ", ".join(self.columns)
        right = ", ".join(operand.render() for operand in self.operands)
        return f"({left}) {self.op} ({right})"


@dataclass(frozen=True)
class AnyOf(Predicate):
    clauses: Tuple[Predicate, ...]

    def render(self) -> str:
        return " OR ".join(f"({clause.render()})" for clause in self.clauses)


@dataclass(frozen=True)
class AllOf(Predicate):
    clauses: Tuple[Predicate, ...]

    def render(self) -> str:
        return " AND ".join(f"({clause.render()})" for clause in self.clauses)


@dataclass
class PredicateBuilder:
    """Accumulates AND-ed clauses and their bound parameters."""
    clauses: list = field(default_factory=list)
    params: Dict[str, Any] = field(default_factory=dict)
    param_types: Dict[str, TypeEngine] = field(default_factory=dict)

    def bind(self, name: str, value: Any, type_: Optional[TypeEngine] = None) -> Bind:
        if name in self.params:
            raise ValueError(f"Parameter already bound: {name}")
        self.params[name] = value
        if type_ is not None:
            self.param_types[name] = type_
        return Bind(name)

    def bind_many(self, prefix: str, values: Iterable[Any]) -> Tuple[Bind, ...]:
        return tuple(self.bind(f"{prefix}_{i}", value) for i, value in enumerate(values))

    def add(self, clause: Predicate) -> None:
        self.clauses.append(clause)

    def render_where(self) -> str:
        if not self.clauses:
            return ""
        return "WHERE " + AllOf(tuple(self.clauses)).render()
