import pytest

from blog_backend.services.seo import SeoService


@pytest.fixture
def seo(blog):
    return SeoService(blog)


def test_tag_seo_uses_description_then_template(seo):
    python = seo.generate_tag_seo("python")
    assert python.description == "Python tips"
    assert python.page_title == "Posts tagged with: Python - Test Blog"
    assert python.canonical_url == "https://blog.test/tags/python"

    web = seo.generate_tag_seo("web")
    assert web.description == "Browse all posts tagged with Web from Test Blog."
    assert web.ogimage.alt == "Test Blog - Posts tagged with Web"


def test_unknown_tag_uses_slug_as_name(seo):
    assert seo.generate_tag_seo("rust").page_title == "Posts tagged with: rust - Test Blog"


def test_category_seo_custom_override(seo):
    news = seo.generate_category_seo("news")
    assert news.page_title == "Latest News"
    assert news.description == "Browse all posts in the News category from Test Blog."
    assert news.keywords == ["news"]

    tech = seo.generate_category_seo("tech")
    assert tech.page_title == "Technology Posts - Test Blog"
    assert tech.description == "All about tech"


def test_broken_settings_degrade_to_fallback(content_dir, seo):
    (content_dir / "data/settings.json").write_text("{not json", encoding="utf-8")
    fallback = seo.generate_tag_seo("web")
    assert fallback.page_title == "web Posts - Website"
    assert fallback.description == "Browse all posts tagged with web."
    assert fallback.og_image == "/og-image.jpg"
    assert fallback.canonical_url == "/tags/web"


def test_strict_mode_raises(content_dir, seo):
    (content_dir / "data/settings.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        seo.generate_tag_seo("web", strict=True)
    with pytest.raises(ValueError):
        seo.generate_homepage_seo(strict=True)
    assert seo.generate_homepage_seo().page_title == "Website"


def test_blog_listing_seo(seo):
    first = seo.generate_blog_listing_seo(1, 3)
    assert first.page_title == "All the posts"
    assert first.canonical_url == "https://blog.test/blog"
    assert first.prev_url is None
    assert first.next_url == "https://blog.test/blog/2"

    second = seo.generate_blog_listing_seo(2, 3)
    assert second.page_title == "All Posts - Page 2 - Test Blog"
    assert second.description == "Browse blog posts from Test Blog - Page 2 of 3."
    assert second.prev_url == "https://blog.test/blog"
    assert second.next_url == "https://blog.test/blog/3"


def test_author_and_homepage_seo(store, seo):
    author = store.get_entry("authors", "jane")
    data = seo.generate_author_seo(author)
    assert data.page_title == "Jane Doe - Author"
    assert data.description == "Writes about code."
    assert data.canonical_url == "https://blog.test/authors/jane"

    home = seo.generate_homepage_seo()
    assert home.page_title == "Test Blog - Testing"
    assert home.canonical_url == "https://blog.test"


def test_blog_listing_schema_positions(blog, seo):
    schema = seo.generate_blog_listing_schema(blog.get_all_posts(), current_page=2)
    elements = schema["mainEntity"]["itemListElement"]
    assert [element["position"] for element in elements] == [6, 7]
    assert elements[0]["item"]["url"] == "https://blog.test/blog/second-post"


def test_missing_author_degrades(seo):
    data = seo.generate_author_seo(None)
    assert data.page_title == "Unknown - Author"
    assert data.description == "Articles by Unknown"
    assert data.canonical_url == "/authors/"
    assert data.ogimage.url == "/og-image.jpg"


def test_missing_author_strict_raises_original_error(seo):
    with pytest.raises(AttributeError):
        seo.generate_author_seo(None, strict=True)
