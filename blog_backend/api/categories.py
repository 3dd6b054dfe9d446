# 分类列表接口 /api/categories.json
from fastapi import APIRouter, Depends, Query

from blog_backend.api.common import (
    api_response, bool_param, fetch_errors, get_store, preflight_response, require_api_key, sort_items,
    text_key,
)
from blog_backend.services.blog_logic import PostIndex
from blog_backend.services.content_store import ContentStore
from blog_backend.services.drafts import filter_published_only
from blog_backend.utils.text import to_iso_string

router = APIRouter()

FEATURED_MIN_POSTS = 3


def last_post_date(posts):
    return to_iso_string(max(post.pub_date for post in posts)) if posts else None


@router.options("/categories.json")
def categories_preflight():
    return preflight_response()


@router.get("/categories.json", dependencies=[Depends(require_api_key)])
def list_categories(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, alias="perPage"),
    sort_by: str = Query("name", alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder"),
    search: str = "",
    featured: str | None = None,
    store: ContentStore = Depends(get_store),
):
    """分类及其已发布文章数；sortBy 支持 name / postCount / lastPostDate"""
    with fetch_errors('Failed to fetch categories'):
        categories = store.get_collection("categories")
        index = PostIndex(store.get_collection("blog", filter_published_only))

        if search:
            term = search.lower()
            categories = [
                category for category in categories
                if term in category.name.lower()
                or term in (category.description or '').lower()
                or term in category.id.lower()
            ]

        items = []
        for category in categories:
            posts = index.category_posts(category.id)
            items.append({
                "id": category.id,
                "name": category.name or category.id,
                "description": category.description,
                "color": category.color,
                "slug": category.url_slug,
                "postCount": len(posts),
                "lastPostDate": last_post_date(posts),
                "featured": len(posts) >= FEATURED_MIN_POSTS,
            })

        if featured is not None:
            items = [item for item in items if item["featured"] == bool_param(featured)]

        items = sort_items(items, sort_by, sort_order, {
            "name": text_key("name"),
            "postCount": lambda item: item["postCount"],
            "lastPostDate": lambda item: item["lastPostDate"] or '',
        }, default="name")

        return api_response(items, page, per_page, {"search": search or None, "featured": featured})
