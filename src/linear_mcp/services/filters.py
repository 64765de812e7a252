"""Issue filter trees.

Search filters arrive as nested JSON objects in Linear's ``IssueFilter``
shape. They are parsed into a small tree of typed nodes so that rewrites
(such as resolving ``"me"``) walk every branch explicitly:

* :class:`FieldSet` - an object mapping field names to sub-filters, e.g.
  ``{"assignee": {...}, "priority": {...}}``
* :class:`Logical` - an ``and``/``or`` list of sub-filters
* :class:`Comparator` - a leaf ``{"eq": value}`` entry
* :class:`Literal` - a raw JSON value held by a comparator
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from .base import SelfReferenceResolver

LOGICAL_OPERATORS = ("and", "or")
USER_RELATIONS = ("assignee", "creator")


@dataclass(frozen=True)
class Literal:
    value: Any


@dataclass(frozen=True)
class Comparator:
    operator: str
    operand: Union[Literal, List[Literal]]


@dataclass(frozen=True)
class Logical:
    operator: str
    operands: List[Union["FieldSet", Literal]] = field(default_factory=list)


@dataclass(frozen=True)
class FieldSet:
    fields: Dict[str, "FilterNode"] = field(default_factory=dict)


FilterNode = Union[FieldSet, Logical, Comparator]


def parse_filter(raw: Dict[str, Any]) -> FieldSet:
    """Parse a JSON filter object into a :class:`FieldSet` tree."""
    fields: Dict[str, FilterNode] = {}
    for key, value in raw.items():
        if key in LOGICAL_OPERATORS and isinstance(value, list):
            fields[key] = Logical(
                operator=key,
                operands=[
                    parse_filter(item) if isinstance(item, dict) else Literal(item)
                    for item in value
                ],
            )
        elif isinstance(value, dict):
            fields[key] = parse_filter(value)
        elif isinstance(value, list):
            fields[key] = Comparator(key, [Literal(item) for item in value])
        else:
            fields[key] = Comparator(key, Literal(value))
    return FieldSet(fields)


def render_filter(node: Union[FilterNode, Literal]) -> Any:
    """Turn a filter tree back into the JSON shape the API expects."""
    if isinstance(node, FieldSet):
        return {key: render_filter(child) for key, child in node.fields.items()}
    if isinstance(node, Logical):
        return [render_filter(operand) for operand in node.operands]
    if isinstance(node, Comparator):
        if isinstance(node.operand, list):
            return [literal.value for literal in node.operand]
        return node.operand.value
    if isinstance(node, Literal):
        return node.value
    raise TypeError(f"Unknown filter node: {type(node).__name__}")


async def _resolve_literal(literal: Literal, resolver: SelfReferenceResolver) -> Literal:
    if isinstance(literal.value, str):
        return Literal(await resolver.resolve(literal.value))
    return literal


async def _resolve_comparator(
    comparator: Comparator, resolver: SelfReferenceResolver
) -> Comparator:
    if isinstance(comparator.operand, list):
        operand = [await _resolve_literal(item, resolver) for item in comparator.operand]
        return Comparator(comparator.operator, operand)
    return Comparator(comparator.operator, await _resolve_literal(comparator.operand, resolver))


async def _resolve_user_filter(node: FieldSet, resolver: SelfReferenceResolver) -> FieldSet:
    """Resolve ``"me"`` in the ``id`` comparators of an assignee/creator filter."""
    id_filter = node.fields.get("id")
    if not isinstance(id_filter, FieldSet):
        return node

    resolved_ids: Dict[str, FilterNode] = {}
    for key, child in id_filter.fields.items():
        if isinstance(child, Comparator):
            resolved_ids[key] = await _resolve_comparator(child, resolver)
        else:
            resolved_ids[key] = child

    fields = dict(node.fields)
    fields["id"] = FieldSet(resolved_ids)
    return FieldSet(fields)


async def resolve_self_references(
    node: FieldSet, resolver: SelfReferenceResolver
) -> FieldSet:
    """Replace ``"me"`` with the viewer id wherever a user id is compared.

    Walks ``and``/``or`` lists and nested field sets at any depth. The
    resolver memoizes the viewer lookup, so it happens at most once.
    """
    fields: Dict[str, FilterNode] = {}
    for key, child in node.fields.items():
        if isinstance(child, FieldSet) and key in USER_RELATIONS:
            fields[key] = await _resolve_user_filter(child, resolver)
        elif isinstance(child, FieldSet):
            fields[key] = await resolve_self_references(child, resolver)
        elif isinstance(child, Logical):
            operands: List[Union[FieldSet, Literal]] = []
            for operand in child.operands:
                if isinstance(operand, FieldSet):
                    operand = await resolve_self_references(operand, resolver)
                operands.append(operand)
            fields[key] = Logical(child.operator, operands)
        else:
            fields[key] = child
    return FieldSet(fields)