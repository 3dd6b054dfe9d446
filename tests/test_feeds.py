from datetime import datetime, timezone
from xml.etree import ElementTree

from blog_backend.services.feeds import generate_robots_txt, generate_rss_feed
from tests.conftest import write_json

NOW = datetime(2024, 1, 15, tzinfo=timezone.utc)


def _settings(**overrides):
    return [{"id": "site", "siteName": "Test Blog", "siteUrl": "https://blog.test", "email": "hello@blog.test",
             **overrides}]


def test_rss_feed_items(blog):
    rss = generate_rss_feed(blog, now=NOW)
    channel = ElementTree.fromstring(rss.encode("utf-8")).find("channel")

    assert channel.findtext("title") == "Test Blog"
    assert channel.findtext("lastBuildDate") == "Mon, 15 Jan 2024 00:00:00 GMT"
    assert channel.findtext("managingEditor") == "hello@blog.test (Jane Doe)"

    items = channel.findall("item")
    assert [item.findtext("link") for item in items] == [
        "https://blog.test/blog/second-post",
        "https://blog.test/blog/first-post",
    ]
    first = items[1]
    assert first.findtext("author") == "hello@blog.test (Jane Doe)"
    assert [category.text for category in first.findall("category")] == ["Technology", "Python", "Web"]
    assert first.find("enclosure").get("url") == "https://blog.test/images/first.jpg"
    assert first.findtext("pubDate") == "Wed, 10 Jan 2024 00:00:00 GMT"


def test_rss_items_limit(content_dir, blog):
    write_json(content_dir, "data/settings.json", _settings(rss={"enabled": True, "itemsPerPage": 1}))
    rss = generate_rss_feed(blog, now=NOW)
    assert len(ElementTree.fromstring(rss.encode("utf-8")).find("channel").findall("item")) == 1


def test_rss_disabled(content_dir, blog):
    write_json(content_dir, "data/settings.json", _settings(rss={"enabled": False}))
    assert generate_rss_feed(blog) is None
    write_json(content_dir, "data/settings.json", _settings())
    assert generate_rss_feed(blog) is None


def test_rss_escapes_text(content_dir, blog):
    write_json(content_dir, "data/settings.json", _settings(siteName="Tom & Jerry", rss={"enabled": True}))
    rss = generate_rss_feed(blog, now=NOW)
    assert "<title>Tom &amp; Jerry</title>" in rss


def test_robots_txt():
    robots = generate_robots_txt("https://blog.test/")
    assert robots.startswith("User-agent: *\nAllow: /\n")
    assert "Disallow: /api/" in robots
    assert robots.endswith("Sitemap: https://blog.test/sitemap-index.xml\n")
