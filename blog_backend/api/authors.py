# 作者列表接口 /api/authors.json
from collections import Counter

from fastapi import APIRouter, Depends, Query

from blog_backend.api.categories import FEATURED_MIN_POSTS, last_post_date
from blog_backend.api.common import (
    api_response, bool_param, fetch_errors, get_store, preflight_response, require_api_key, sort_items,
    text_key, top_counts,
)
from blog_backend.services.blog_logic import PostIndex
from blog_backend.services.content_store import ContentStore
from blog_backend.services.drafts import filter_published_only

router = APIRouter()


@router.options("/authors.json")
def authors_preflight():
    return preflight_response()


@router.get("/authors.json", dependencies=[Depends(require_api_key)])
def list_authors(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, alias="perPage"),
    sort_by: str = Query("postCount", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    search: str = "",
    featured: str | None = None,
    min_posts: int = Query(0, alias="minPosts"),
    store: ContentStore = Depends(get_store),
):
    """作者及其已发布文章数、最常写的分类（前 3）和标签（前 5）"""
    with fetch_errors('Failed to fetch authors'):
        authors = store.get_collection("authors")
        published = store.get_collection("blog", filter_published_only)
        index = PostIndex(published)
        category_names = {category.id: category.name for category in store.get_collection("categories")}
        tag_names = {tag.id: tag.name for tag in store.get_collection("tags")}

        if search:
            term = search.lower()
            authors = [
                author for author in authors
                if term in author.name.lower()
                or term in (author.bio or '').lower()
                or term in author.id.lower()
                or term in (author.email or '').lower()
            ]

        items = []
        for author in authors:
            posts = index.author_posts(author.id)
            category_counts = Counter(post.category.id for post in posts)
            tag_counts = Counter(tag_id for post in posts for tag_id in post.tag_ids())
            items.append({
                "id": author.id,
                "name": author.name or author.id,
                "bio": author.bio,
                "avatar": author.avatar,
                "email": author.email,
                "twitter": author.twitter,
                "github": author.github,
                "website": author.website,
                "postCount": len(posts),
                "lastPostDate": last_post_date(posts),
                "featured": len(posts) >= FEATURED_MIN_POSTS,
                "topCategories": [
                    {"name": category_names.get(category_id, category_id), "postCount": count}
                    for category_id, count in top_counts(category_counts, 3)
                ],
                "topTags": [
                    {"name": tag_names.get(tag_id, tag_id), "postCount": count}
                    for tag_id, count in top_counts(tag_counts, 5)
                ],
            })

        if min_posts > 0:
            items = [item for item in items if item["postCount"] >= min_posts]
        if featured is not None:
            items = [item for item in items if item["featured"] == bool_param(featured)]

        items = sort_items(items, sort_by, sort_order, {
            "name": text_key("name"),
            "postCount": lambda item: item["postCount"],
            "lastPostDate": lambda item: item["lastPostDate"] or '',
        }, default="postCount")

        top_authors = sorted(items, key=lambda item: item["postCount"], reverse=True)[:5]
        stats = {
            "totalAuthors": len(items),
            "totalPosts": len(published),
            "averagePostsPerAuthor": round(len(published) / len(items), 2) if items else 0,
            "topAuthors": [{"name": item["name"], "postCount": item["postCount"]} for item in top_authors],
        }

        return api_response(items, page, per_page, {
            "search": search or None,
            "featured": featured,
            "minPosts": min_posts if min_posts > 0 else None,
        }, stats=stats)
