"""Shared fixtures for core unit tests"""

import pytest

from blogsite.core.models import Document, DocumentKind


FIRST_TEST_MD = """\
---
layout: post
title: Writing Your First Unit Test
date: 2015-03-12 10:00:00 -0500
categories: [unit-testing]
---

Every test has three parts: arrange, act, assert.
"""

ABOUT_MD = """\
---
layout: page
title: About
permalink: /about/
---

I write about testing.
"""


def make_post(title: str, date, categories=(), permalink=None, source=None) -> Document:
    return Document(
        kind=DocumentKind.post,
        title=title,
        date=date,
        categories=categories,
        permalink=permalink,
        source=source or f"_posts/{title}.md",
    )


def make_page(title: str, permalink=None, source=None) -> Document:
    return Document(kind=DocumentKind.page, title=title, permalink=permalink, source=source or f"{title}.md")


@pytest.fixture(name="post")
def post_factory_fixture():
    """Factory for in-memory posts."""
    return make_post


@pytest.fixture(name="page")
def page_factory_fixture():
    """Factory for in-memory pages."""
    return make_page


@pytest.fixture(name="site_dir")
def site_dir_fixture(tmp_path):
    """A small blog: one page and two posts in _posts/."""
    root = tmp_path / "blog"
    posts = root / "_posts"
    posts.mkdir(parents=True)
    (root / "about.md").write_text(ABOUT_MD)
    (posts / "2015-03-12-writing-your-first-unit-test.md").write_text(FIRST_TEST_MD)
    (posts / "2015-04-02-mocks-and-stubs.md").write_text(
        "---\ntitle: Mocks and Stubs\ncategories: unit-testing mocking\n---\n\nFakes everywhere.\n"
    )
    return root
