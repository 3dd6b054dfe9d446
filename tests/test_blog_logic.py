from blog_backend.services.blog_logic import BlogService, score_related
from blog_backend.services.content_store import ContentStore
from blog_backend.services.drafts import filter_drafts_only
from tests.conftest import write_json, write_post


def test_all_posts_excludes_drafts_newest_first(blog):
    assert [post.id for post in blog.get_all_posts()] == ["second-post", "first-post"]


def test_development_mode_shows_drafts(store):
    posts = BlogService(store, show_drafts=True).get_all_posts()
    assert [post.id for post in posts] == ["third-post", "second-post", "first-post"]


def test_categories_with_counts_skip_empty(blog):
    counts = {item.entry.id: item.post_count for item in blog.get_categories_with_post_counts()}
    assert counts == {"tech": 1, "life": 1}


def test_posts_with_unknown_category_are_not_counted(content_dir, blog):
    write_post(
        content_dir, "ghost-post", "Body", title="Ghost", description="Lost category",
        pubDate="2024-05-01", author="john", category="ghost",
    )
    total = sum(item.post_count for item in blog.get_categories_with_post_counts())
    assert total == 2
    assert len(blog.get_all_posts()) == 3


def test_category_paths_include_empty_categories(blog):
    paths = blog.generate_category_paths()
    assert [path["params"]["category"] for path in paths] == ["tech", "life", "news"]
    assert paths[2]["props"]["posts"] == []


def test_tags_with_counts_keep_zero(blog):
    counts = [(item.entry.id, item.post_count) for item in blog.get_tags_with_post_counts()]
    assert counts == [("web", 2), ("python", 1), ("unused", 0)]


def test_duplicate_tag_counted_once(content_dir, blog):
    write_post(
        content_dir, "dup-tags", "Body", title="Dup", description="Dup tags",
        pubDate="2024-05-01", author="john", category="life", tags=["unused", "unused"],
    )
    counts = {item.entry.id: item.post_count for item in blog.get_tags_with_post_counts()}
    assert counts["unused"] == 1


def test_related_posts_ranked_by_score(store):
    blog = BlogService(store, show_drafts=True)
    current = store.get_entry("blog", "first-post")
    related = blog.get_related_posts(current)
    assert [post.id for post in related] == ["third-post", "second-post"]
    scores = [score_related(current, post) for post in related]
    assert scores == sorted(scores, reverse=True)
    assert all(score > 0 for score in scores)


def test_related_posts_limit_and_no_match(content_dir, store):
    write_post(
        content_dir, "lonely", "Body", title="Lonely", description="Nothing shared",
        pubDate="2024-05-01", author="john", category="news",
    )
    blog = BlogService(store, show_drafts=True)
    assert blog.get_related_posts(store.get_entry("blog", "lonely")) == []
    assert len(blog.get_related_posts(store.get_entry("blog", "first-post"), limit=1)) == 1


def test_search_posts(blog):
    assert blog.search_posts("   ") == []
    assert [post.id for post in blog.search_posts("second")] == ["second-post"]
    assert [post.id for post in blog.search_posts("ONE")] == ["second-post", "first-post"]


def test_featured_and_recent(blog):
    assert [post.id for post in blog.get_featured_posts()] == ["first-post"]
    assert [post.id for post in blog.get_recent_posts(1)] == ["second-post"]


def test_blog_stats(blog):
    stats = blog.get_blog_stats()
    assert stats["totalPosts"] == 2
    assert stats["totalCategories"] == 3
    assert stats["featuredPosts"] == 1


def test_pagination_paths(blog):
    paths = blog.generate_blog_pagination_paths(page_size=1)
    assert [path["params"]["page"] for path in paths] == ["1", "2"]
    assert paths[1]["props"]["page"].data[0].id == "first-post"


def test_site_settings_defaults(tmp_path):
    settings = BlogService(ContentStore(tmp_path)).get_site_settings()
    assert settings.site_name == "Blog"
    assert settings.site_url == "https://example.com"


def test_site_settings_fill_blank_fields(content_dir, blog):
    write_json(content_dir, "data/settings.json", [{"id": "site", "siteName": "Mine"}])
    settings = blog.get_site_settings()
    assert settings.site_name == "Mine"
    assert settings.email == "author@example.com"


def test_page_helpers(blog):
    assert blog.get_page_data("all-posts").seo.title == "All the posts"
    assert blog.get_page_data("missing") is None
    assert blog.should_index_page("privacy-policy") is False
    assert blog.should_index_page("unknown") is True
    assert blog.is_page_published("about") is False
    assert blog.is_page_published("unknown") is False
    assert [page.id for page in blog.get_published_pages()] == ["all-posts", "privacy-policy"]


def test_page_data_non_strict(content_dir, blog):
    (content_dir / "data/pages.json").write_text("[", encoding="utf-8")
    assert blog.get_page_data("all-posts", strict=False) is None


def test_author_queries(blog):
    assert [post.id for post in blog.get_posts_by_author_slug("jane")] == ["first-post"]
    assert blog.get_posts_by_author_slug("nobody") == []
    assert blog.get_author_tags("jane") == ["python", "web"]
    counts = [(item.entry.id, item.post_count) for item in blog.get_authors_with_post_counts()]
    assert counts == [("jane", 1), ("john", 1)]
    assert [path["params"]["slug"] for path in blog.generate_author_paths()] == ["jane", "john"]


def test_top_categories_skip_uncategorized(content_dir, blog):
    write_json(content_dir, "data/categories.json", [
        {"id": "tech", "name": "Technology"},
        {"id": "life", "name": "Uncategorized"},
    ])
    assert [item.entry.id for item in blog.get_top_categories()] == ["tech"]


def test_taxonomy_post_lookups(blog):
    assert [post.id for post in blog.get_posts_by_category("tech")] == ["first-post"]
    assert [post.id for post in blog.get_posts_by_tag("web")] == ["second-post", "first-post"]
    paths = {path["params"]["tag"]: len(path["props"]["posts"]) for path in blog.generate_tag_paths()}
    assert paths == {"python": 1, "web": 2, "unused": 0}


def test_drafts_only(store):
    assert [post.id for post in store.get_collection("blog", filter_drafts_only)] == ["third-post"]


def test_legal_page(content_dir, blog):
    legal_dir = content_dir / "legal"
    legal_dir.mkdir()
    (legal_dir / "privacy.md").write_text(
        "---\ntitle: Privacy Policy\ndescription: How we handle data\npubDate: 2024-01-01\n---\nWe keep nothing.\n",
        encoding="utf-8",
    )
    page = blog.get_legal_page("privacy")
    assert page.title == "Privacy Policy"
    assert page.pub_date.year == 2024
    assert page.body == "We keep nothing."
    assert blog.get_legal_page("terms") is None


def test_object_references_are_counted(content_dir, blog):
    write_post(
        content_dir, "object-refs", "Body", title="Object refs", description="Wrapped references",
        pubDate="2024-05-01", author={"id": "john"}, category={"id": "tech"}, tags=[{"id": "python"}],
    )
    post = blog.store.get_entry("blog", "object-refs")
    assert (post.author.id, post.category.id, post.tag_ids()) == ("john", "tech", ["python"])

    categories = {item.entry.id: item.post_count for item in blog.get_categories_with_post_counts()}
    tags = {item.entry.id: item.post_count for item in blog.get_tags_with_post_counts()}
    authors = {item.entry.id: item.post_count for item in blog.get_authors_with_post_counts()}
    assert categories["tech"] == 2
    assert tags["python"] == 2
    assert authors["john"] == 2


def test_category_and_tag_outranks_category_only(content_dir, blog):
    write_post(
        content_dir, "cat-only", "Body", title="Category only", description="Same category",
        pubDate="2024-06-01", author="john", category="tech",
    )
    write_post(
        content_dir, "cat-tag", "Body", title="Category and tag", description="Same category and tag",
        pubDate="2024-04-01", author="john", category="tech", tags=["python"],
    )
    related = blog.get_related_posts(blog.store.get_entry("blog", "first-post"))
    assert [post.id for post in related] == ["cat-tag", "cat-only", "second-post"]
