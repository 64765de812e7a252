"""Tests for the issue filter tree and "me" resolution."""

import pytest

from linear_mcp.services.base import SelfReferenceResolver
from linear_mcp.services.filters import (
    Comparator,
    FieldSet,
    Literal,
    Logical,
    parse_filter,
    render_filter,
    resolve_self_references,
)


class TestParseFilter:
    def test_nested_field_sets_and_comparators(self):
        tree = parse_filter({"priority": {"gte": 2}, "labels": {"name": {"in": ["Bug", "P1"]}}})

        assert tree == FieldSet({
            "priority": FieldSet({"gte": Comparator("gte", Literal(2))}),
            "labels": FieldSet({
                "name": FieldSet({"in": Comparator("in", [Literal("Bug"), Literal("P1")])}),
            }),
        })

    def test_logical_operands(self):
        tree = parse_filter({"or": [{"priority": {"eq": 1}}, {"priority": {"eq": 2}}]})

        logical = tree.fields["or"]
        assert isinstance(logical, Logical)
        assert logical.operator == "or"
        assert len(logical.operands) == 2
        assert all(isinstance(operand, FieldSet) for operand in logical.operands)

    def test_round_trip(self):
        raw = {
            "and": [
                {"state": {"type": {"eq": "started"}}},
                {"assignee": {"id": {"in": ["a", "b"]}}},
            ],
            "dueDate": {"lt": "P2W"},
            "estimate": {"null": True},
        }
        assert render_filter(parse_filter(raw)) == raw


@pytest.mark.asyncio
class TestResolveSelfReferences:
    async def _resolve(self, client, raw):
        resolver = SelfReferenceResolver(client)
        return render_filter(await resolve_self_references(parse_filter(raw), resolver))

    async def test_assignee_and_creator(self, client):
        result = await self._resolve(client, {
            "assignee": {"id": {"eq": "me"}},
            "creator": {"id": {"neq": "me"}},
        })

        assert result == {
            "assignee": {"id": {"eq": "current-user"}},
            "creator": {"id": {"neq": "current-user"}},
        }

    async def test_in_lists(self, client):
        result = await self._resolve(client, {"assignee": {"id": {"in": ["me", "user-2"]}}})
        assert result == {"assignee": {"id": {"in": ["current-user", "user-2"]}}}

    async def test_nested_logical_operators(self, client):
        result = await self._resolve(client, {
            "and": [
                {"priority": {"gte": 2}},
                {"or": [
                    {"assignee": {"id": {"eq": "me"}}},
                    {"creator": {"id": {"eq": "me"}}},
                ]},
            ],
        })

        assert result == {
            "and": [
                {"priority": {"gte": 2}},
                {"or": [
                    {"assignee": {"id": {"eq": "current-user"}}},
                    {"creator": {"id": {"eq": "current-user"}}},
                ]},
            ],
        }

    async def test_viewer_is_fetched_once(self, client):
        await self._resolve(client, {
            "or": [
                {"assignee": {"id": {"eq": "me"}}},
                {"creator": {"id": {"eq": "me"}}},
                {"assignee": {"id": {"in": ["me"]}}},
            ],
        })

        client.viewer.assert_awaited_once()

    async def test_other_fields_are_untouched(self, client):
        result = await self._resolve(client, {
            "title": {"eq": "me"},
            "assignee": {"name": {"eq": "me"}},
        })

        assert result == {"title": {"eq": "me"}, "assignee": {"name": {"eq": "me"}}}
        client.viewer.assert_not_awaited()
