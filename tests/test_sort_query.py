# -*- coding: utf-8 -*-
"""
test_sort_query

Ordering list querysets by a requested column.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import pytest

from breadadmin.adapters import Adapter
from breadadmin.core.exceptions import BadRequestError
from breadadmin.core.search import QueryComposer
from breadadmin.schema import Layout
from tests.models import Post, database, post_bread, seed


class TestApplySort:
    """Direction handling and translatable columns."""

    @pytest.mark.asyncio
    async def test_desc_sorts_descending(self) -> None:
        async with database():
            await seed()
            layout = post_bread().get_layout("list")
            rows = await QueryComposer(Adapter()).apply_sort(Post.all(), layout, "views", "DESC")

        assert [row.views for row in rows] == [10, 7, 3]

    @pytest.mark.asyncio
    async def test_asc_and_missing_direction_sort_ascending(self) -> None:
        async with database():
            await seed()
            layout = post_bread().get_layout("list")
            composer = QueryComposer(Adapter())
            asc = await composer.apply_sort(Post.all(), layout, "title", "Asc")
            default = await composer.apply_sort(Post.all(), layout, "title", None)

        expected = ["Bar crawl", "Foo fighters", "Quiet evening"]
        assert [row.title for row in asc] == expected
        assert [row.title for row in default] == expected

    def test_unknown_direction_is_rejected(self) -> None:
        layout = post_bread().get_layout("list")

        with pytest.raises(BadRequestError) as excinfo:
            QueryComposer(Adapter()).apply_sort(Post, layout, "title", "sideways")
        assert excinfo.value.detail == "Invalid sort direction 'sideways'"

    def test_missing_column_returns_queryset_unchanged(self) -> None:
        layout = post_bread().get_layout("list")
        marker = object()
        assert QueryComposer(Adapter()).apply_sort(marker, layout, None, "desc") is marker
        assert QueryComposer(Adapter()).apply_sort(marker, layout, "", "desc") is marker

    @pytest.mark.asyncio
    async def test_translatable_column_orders_by_raw_value(self) -> None:
        layout = Layout(
            name="list",
            formfields=[{"type": "text", "column": "bio", "translatable": True}],
        )
        async with database():
            await Post.create(title="b", bio='{"en": "b"}')
            await Post.create(title="a", bio='{"en": "a"}')
            rows = await QueryComposer(Adapter()).apply_sort(Post.all(), layout, "bio", "desc")

        assert [row.title for row in rows] == ["b", "a"]


# The End
