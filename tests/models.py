# -*- coding: utf-8 -*-
"""
models

Tortoise models and bread definitions shared by the test-suite.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from tortoise import Tortoise, fields, models

from breadadmin.schema import Bread


class Author(models.Model):
    id = fields.IntField(pk=True)
    name = fields.CharField(max_length=100)

    class Meta:
        table = "authors"


class Tag(models.Model):
    id = fields.IntField(pk=True)
    name = fields.CharField(max_length=50)

    class Meta:
        table = "tags"


class Post(models.Model):
    id = fields.IntField(pk=True)
    title = fields.CharField(max_length=200)
    body = fields.TextField(null=True)
    bio = fields.TextField(null=True)
    status = fields.CharField(max_length=20, default="draft")
    views = fields.IntField(default=0)
    published = fields.BooleanField(default=False)
    published_at = fields.DatetimeField(null=True)
    password = fields.CharField(max_length=255, null=True)
    author: fields.ForeignKeyNullableRelation[Author] = fields.ForeignKeyField(
        "models.Author", related_name="posts", null=True
    )
    tags: fields.ManyToManyRelation[Tag] = fields.ManyToManyField(
        "models.Tag", related_name="posts"
    )

    class Meta:
        table = "posts"

    def excerpt(self) -> str:
        return (self.body or "")[:10]


class Comment(models.Model):
    id = fields.IntField(pk=True)
    text = fields.CharField(max_length=200)
    post: fields.ForeignKeyRelation[Post] = fields.ForeignKeyField(
        "models.Post", related_name="comments"
    )

    class Meta:
        table = "comments"


@asynccontextmanager
async def database() -> AsyncIterator[None]:
    """Run the body against a fresh in-memory schema."""

    await Tortoise._reset_apps()
    await Tortoise.init(db_url="sqlite://:memory:", modules={"models": [__name__]})
    await Tortoise.generate_schemas()
    try:
        yield
    finally:
        await Tortoise.close_connections()
        await Tortoise._reset_apps()


async def seed() -> dict[str, Any]:
    """Create two authors, three posts, tags and comments."""

    ann = await Author.create(name="Ann")
    bob = await Author.create(name="Bob")
    python = await Tag.create(name="python")
    rust = await Tag.create(name="rust")
    first = await Post.create(
        title="Foo fighters", body="Loud guitars all night", author=ann, views=10
    )
    second = await Post.create(
        title="Quiet evening", body="Tea and foo", author=bob, views=3, published=True
    )
    third = await Post.create(title="Bar crawl", body="", views=7)
    await first.tags.add(python)
    await second.tags.add(python, rust)
    await Comment.create(text="great read", post=first)
    await Comment.create(text="meh", post=second)
    return {
        "authors": [ann, bob],
        "tags": [python, rust],
        "posts": [first, second, third],
    }


def post_bread(**overrides: Any) -> Bread:
    """Return the bread describing :class:`Post` with a list and a view layout."""

    data: dict[str, Any] = {
        "slug": "posts",
        "table": "posts",
        "model": "models.Post",
        "name_singular": "Post",
        "name_plural": "Posts",
        "computed_properties": ["excerpt"],
        "layouts": [
            {
                "name": "list",
                "type": "list",
                "formfields": [
                    {"type": "text", "column": "title", "searchable": True, "orderable": True},
                    {"type": "textarea", "column": "body", "searchable": True,
                     "options": {"display_length": 8}},
                    {"type": "number", "column": "views", "orderable": True},
                    {"type": "checkbox", "column": "published",
                     "options": {"on": "Yes", "off": "No"}},
                    {"type": "relationship", "column": "author.name", "searchable": True},
                    {"type": "relationship", "column": "tags.name",
                     "options": {"separator": ", "}},
                ],
            },
            {
                "name": "edit",
                "type": "view",
                "formfields": [
                    {"type": "text", "column": "title",
                     "rules": [{"rule": "required"}, {"rule": "max:200"}]},
                    {"type": "textarea", "column": "body"},
                    {"type": "text", "column": "bio", "translatable": True,
                     "rules": [{"rule": "required",
                                "message": {"en": "Bio is required", "de": "Bio fehlt"}}]},
                    {"type": "select", "column": "status",
                     "options": {"choices": {"draft": "Draft", "live": "Live"}},
                     "rules": [{"rule": "in:draft,live"}]},
                    {"type": "number", "column": "views"},
                    {"type": "checkbox", "column": "published"},
                    {"type": "relationship", "column": "author_id"},
                ],
            },
        ],
    }
    data.update(overrides)
    return Bread.model_validate(data)


# The End
