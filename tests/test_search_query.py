# -*- coding: utf-8 -*-
"""
test_search_query

Global search and per-column filters composed onto Tortoise querysets.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging

import pytest

from breadadmin.adapters import Adapter
from breadadmin.core import search as search_module
from breadadmin.core.search import QueryComposer, SearchOutcome
from breadadmin.schema import Layout
from tests.models import Post, database, post_bread, seed


def _titles(rows) -> set[str]:
    return {row.title for row in rows}


class TestGlobalSearch:
    """The global term ORs every undotted searchable column."""

    @pytest.mark.asyncio
    async def test_term_matches_any_searchable_column(self) -> None:
        async with database():
            await seed()
            layout = post_bread().get_layout("list")
            qs = QueryComposer(Adapter()).apply_search(Post.all(), layout, {}, "FOO")
            rows = await qs

        # "Foo fighters" matches on title, "Quiet evening" on body.
        assert _titles(rows) == {"Foo fighters", "Quiet evening"}

    @pytest.mark.asyncio
    async def test_only_undotted_searchable_column_reaches_where_clause(self) -> None:
        layout = Layout(
            name="list",
            formfields=[
                {"type": "text", "column": "title", "searchable": True},
                {"type": "text", "column": "bio.en", "searchable": True},
            ],
        )
        async with database():
            plan = QueryComposer(Adapter()).plan_search(Post.all(), layout, None, "foo")
            sql = plan.queryset.sql()

        where = sql.split("WHERE", 1)[1]
        assert '"title"' in where
        assert "LIKE" in where.upper()
        assert "ESCAPE" not in where.upper()
        assert "bio" not in where
        assert [step.outcome for step in plan.steps] == [SearchOutcome.GLOBAL]
        assert plan.steps[0].column == "title"

    @pytest.mark.asyncio
    async def test_wildcards_in_term_are_not_escaped(self) -> None:
        async with database():
            await seed()
            layout = post_bread().get_layout("list")
            composer = QueryComposer(Adapter())
            everything = await composer.apply_search(Post.all(), layout, {}, "%")
            single = await composer.apply_search(Post.all(), layout, {}, "F_o")

        assert len(everything) == 3
        # "_" stands for any one character: "Foo" in a title and "foo" in a body.
        assert _titles(single) == {"Foo fighters", "Quiet evening"}

    @pytest.mark.asyncio
    async def test_empty_term_leaves_query_untouched(self) -> None:
        async with database():
            await seed()
            layout = post_bread().get_layout("list")
            plan = QueryComposer(Adapter()).plan_search(Post.all(), layout, {}, "")
            rows = await plan.queryset

        assert len(rows) == 3
        assert plan.steps == []


class TestColumnFilters:
    """Dotted keys filter through relations, plain keys through formfields."""

    @pytest.mark.asyncio
    async def test_relation_filter_keeps_rows_with_matching_related_row(self) -> None:
        async with database():
            await seed()
            layout = post_bread().get_layout("list")
            plan = QueryComposer(Adapter()).plan_search(
                Post.all(), layout, {"author.name": "an"}, None
            )
            rows = await plan.queryset

        assert _titles(rows) == {"Foo fighters"}
        assert plan.steps[0].outcome is SearchOutcome.RELATION

    @pytest.mark.asyncio
    async def test_column_filters_keep_like_wildcards(self) -> None:
        async with database():
            await seed()
            layout = post_bread().get_layout("list")
            composer = QueryComposer(Adapter())
            by_author = await composer.apply_search(
                Post.all(), layout, {"author.name": "a_n"}, None
            )
            by_title = await composer.apply_search(Post.all(), layout, {"title": "b%l"}, None)

        assert _titles(by_author) == {"Foo fighters"}
        assert _titles(by_title) == {"Bar crawl"}

    @pytest.mark.asyncio
    async def test_many_to_many_filter_returns_each_row_once(self) -> None:
        async with database():
            await seed()
            layout = post_bread().get_layout("list")
            qs = QueryComposer(Adapter()).apply_search(
                Post.all(), layout, {"tags.name": "r"}, None
            )
            rows = await qs

        # Only "rust" contains an "r"; "Quiet evening" also carries "python".
        assert [row.title for row in rows] == ["Quiet evening"]

    @pytest.mark.asyncio
    async def test_reverse_relation_filter(self) -> None:
        async with database():
            await seed()
            layout = post_bread().get_layout("list")
            rows = await QueryComposer(Adapter()).apply_search(
                Post.all(), layout, {"comments.text": "GREAT"}, None
            )

        assert _titles(rows) == {"Foo fighters"}

    @pytest.mark.asyncio
    async def test_formfield_filter_uses_formfield_query(self) -> None:
        async with database():
            await seed()
            layout = post_bread().get_layout("list")
            composer = QueryComposer(Adapter())
            by_views = await composer.apply_search(Post.all(), layout, {"views": "7"}, None)
            by_flag = await composer.apply_search(Post.all(), layout, {"published": "1"}, None)
            by_title = await composer.apply_search(Post.all(), layout, {"title": "bar"}, None)

        assert _titles(by_views) == {"Bar crawl"}
        assert _titles(by_flag) == {"Quiet evening"}
        assert _titles(by_title) == {"Bar crawl"}

    @pytest.mark.asyncio
    async def test_unknown_column_does_not_change_results(self, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger=search_module.logger.name)
        async with database():
            await seed()
            layout = post_bread().get_layout("list")
            plan = QueryComposer(Adapter()).plan_search(
                Post.all(), layout, {"nonexistent": "x"}, None
            )
            rows = await plan.queryset

        assert len(rows) == 3
        assert plan.steps[0].outcome is SearchOutcome.IGNORED_UNKNOWN
        assert [step.column for step in plan.ignored] == ["nonexistent"]
        assert "nonexistent" in caplog.text

    @pytest.mark.asyncio
    async def test_pivot_filter_is_ignored(self) -> None:
        async with database():
            await seed()
            layout = post_bread().get_layout("list")
            plan = QueryComposer(Adapter()).plan_search(
                Post.all(), layout, {"tags.pivot.order": "1"}, None
            )
            rows = await plan.queryset

        assert len(rows) == 3
        assert plan.steps[0].outcome is SearchOutcome.IGNORED_PIVOT
        assert plan.steps[0].outcome.ignored

    @pytest.mark.asyncio
    async def test_global_term_and_filters_combine(self) -> None:
        async with database():
            await seed()
            layout = post_bread().get_layout("list")
            rows = await QueryComposer(Adapter()).apply_search(
                Post.all(), layout, {"author.name": "bob"}, "foo"
            )

        assert _titles(rows) == {"Quiet evening"}


# The End
