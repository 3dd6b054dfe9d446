import json

import frontmatter
import pytest
from fastapi.testclient import TestClient

from blog_backend.config import Config, get_config
from blog_backend.main import app
from blog_backend.services.blog_logic import BlogService
from blog_backend.services.content_store import ContentStore

API_KEY = "test-key"
AUTH = {"Authorization": f"Bearer {API_KEY}"}


def write_json(content_dir, relative_path, data):
    path = content_dir / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def write_post(content_dir, post_id, body="", **metadata):
    path = content_dir / "blog" / f"{post_id}.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(frontmatter.dumps(frontmatter.Post(body, **metadata)), encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path):
    root = tmp_path / "content"
    write_json(root, "data/authors.json", [
        {"id": "jane", "name": "Jane Doe", "bio": "Writes about code.", "email": "jane@blog.test", "twitter": "@jane"},
        {"id": "john", "name": "John Roe"},
    ])
    write_json(root, "data/categories.json", [
        {"id": "tech", "name": "Technology", "description": "All about tech"},
        {"id": "life", "name": "Life"},
        {"id": "news", "name": "News", "seo": {"title": "Latest News", "keywords": ["news"]}},
    ])
    write_json(root, "data/tags.json", [
        {"id": "python", "name": "Python", "description": "Python tips"},
        {"id": "web", "name": "Web"},
        {"id": "unused", "name": "Unused"},
    ])
    write_json(root, "data/settings.json", [{
        "id": "site",
        "siteName": "Test Blog",
        "siteDescription": "Testing",
        "siteUrl": "https://blog.test",
        "author": "Jane Doe",
        "email": "hello@blog.test",
        "rss": {"enabled": True, "itemsPerPage": 20},
    }])
    write_json(root, "data/pages.json", [
        {"id": "all-posts", "title": "All Posts", "slug": "blog", "seo": {"title": "All the posts"}},
        {"id": "privacy-policy", "title": "Privacy Policy", "slug": "privacy-policy", "noindex": True},
        {"id": "about", "title": "About", "slug": "about", "published": False},
    ])
    write_json(root, "data/affiliate-categories.json", [
        {"id": "gear", "name": "Gear", "description": "Desk gear"},
        {"id": "empty-cat", "name": "Empty"},
    ])
    write_json(root, "data/products/gear.json", [
        {
            "id": "p1", "title": "Laptop Stand", "description": "Aluminium stand", "price": "$80.00",
            "originalPrice": "$100.00", "affiliateUrl": "https://shop.test/p1", "category": "gear",
            "rating": 4.7, "brand": "Acme",
        },
        {
            "id": "p2", "title": "Mouse", "description": "Wireless mouse", "price": "$20",
            "affiliateUrl": "https://shop.test/p2", "category": "gear", "rating": 4.0, "brand": "Zeta",
        },
    ])
    write_json(root, "data/affiliate-comparisons.json", [
        {"id": "stands", "title": "Best stands", "products": ["p1", "missing"], "category": "gear"},
    ])

    write_post(
        root, "first-post", "Hello from the first post.",
        title="First Post", description="The first one", pubDate="2024-01-10",
        author="jane", category="tech", tags=["python", "web"], featured=True,
        image={"url": "/images/first.jpg", "alt": "First"},
    )
    write_post(
        root, "second-post", "Second body.",
        title="Second Post", description="The second one", pubDate="2024-02-15",
        author="john", category="life", tags=["web"],
    )
    write_post(
        root, "third-post", "Not ready yet.",
        title="Third Post", description="A draft", pubDate="2024-03-01",
        author="jane", category="tech", tags=["python"], status="draft",
    )
    return root


@pytest.fixture
def store(content_dir):
    return ContentStore(content_dir)


@pytest.fixture
def blog(store):
    return BlogService(store)


@pytest.fixture
def client(content_dir):
    test_config = Config(CONTENT_DIR=str(content_dir), BLOG_API_KEY=API_KEY, SITE_URL="https://blog.test")
    app.dependency_overrides[get_config] = lambda: test_config
    yield TestClient(app)
    app.dependency_overrides.clear()
