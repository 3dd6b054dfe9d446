# 标签列表接口 /api/tags.json
from collections import Counter
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, Query

from blog_backend.api.categories import last_post_date
from blog_backend.api.common import (
    api_response, bool_param, fetch_errors, get_store, most_common, preflight_response, require_api_key,
    sort_items, text_key,
)
from blog_backend.services.blog_logic import PostIndex
from blog_backend.services.content_store import ContentStore
from blog_backend.services.drafts import filter_published_only

router = APIRouter()

TRENDING_WINDOW = timedelta(days=30)
TRENDING_MIN_POSTS = 2


@router.options("/tags.json")
def tags_preflight():
    return preflight_response()


@router.get("/tags.json", dependencies=[Depends(require_api_key)])
def list_tags(
    page: int = Query(1, ge=1),
    per_page: int = Query(100, ge=1, alias="perPage"),
    sort_by: str = Query("postCount", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    search: str = "",
    trending: str | None = None,
    min_posts: int = Query(0, alias="minPosts"),
    store: ContentStore = Depends(get_store),
):
    """
    标签及其已发布文章数。
    trending：最近 30 天内至少 2 篇文章；category：该标签文章中最常见的分类。
    """
    with fetch_errors('Failed to fetch tags'):
        tags = store.get_collection("tags")
        published = store.get_collection("blog", filter_published_only)
        index = PostIndex(published)
        trending_since = datetime.now(timezone.utc) - TRENDING_WINDOW

        if search:
            term = search.lower()
            tags = [
                tag for tag in tags
                if term in tag.name.lower() or term in (tag.description or '').lower() or term in tag.id.lower()
            ]

        items = []
        for tag in tags:
            posts = index.tag_posts(tag.id)
            recent = [post for post in posts if post.pub_date > trending_since]
            items.append({
                "id": tag.id,
                "name": tag.name or tag.id,
                "description": tag.description,
                "color": tag.color,
                "slug": tag.url_slug,
                "postCount": len(posts),
                "lastPostDate": last_post_date(posts),
                "trending": len(recent) >= TRENDING_MIN_POSTS,
                "category": most_common(Counter(post.category.id for post in posts)),
            })

        if min_posts > 0:
            items = [item for item in items if item["postCount"] >= min_posts]
        if trending is not None:
            items = [item for item in items if item["trending"] == bool_param(trending)]

        items = sort_items(items, sort_by, sort_order, {
            "name": text_key("name"),
            "postCount": lambda item: item["postCount"],
            "lastPostDate": lambda item: item["lastPostDate"] or '',
        }, default="postCount")

        top_tags = sorted(items, key=lambda item: item["postCount"], reverse=True)[:5]
        stats = {
            "totalTags": len(items),
            "totalPosts": len(published),
            "averagePostsPerTag": round(len(published) / len(items), 2) if items else 0,
            "topTags": [{"name": item["name"], "postCount": item["postCount"]} for item in top_tags],
        }

        return api_response(items, page, per_page, {
            "search": search or None,
            "trending": trending,
            "minPosts": min_posts if min_posts > 0 else None,
        }, stats=stats)
