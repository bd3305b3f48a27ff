from blogsite.core.parse import _strip_frontmatter

def test_parse_frontmatter_jekyll_post():
    text = """---
layout: post
title: "Writing Your First Unit Test"
date: 2015-03-12 10:00:00 -0500
categories: unit-testing tdd
---
Start with a failing test.

{% highlight java %}
assertEquals(4, calc.add(2, 2));
{% endhighlight %}
"""
    fm, body = _strip_frontmatter(text)
    assert fm["title"] == "Writing Your First Unit Test"
    assert fm["categories"] == "unit-testing tdd"
    assert fm["date"] == "2015-03-12 10:00:00 -0500"
    assert body.startswith("Start with a failing test.")
    assert "{% highlight java %}" in body
