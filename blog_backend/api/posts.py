# 文章列表接口 /api/posts.json
from fastapi import APIRouter, Depends, Query

from blog_backend.api.common import (
    api_response, bool_param, fetch_errors, get_store, preflight_response, require_api_key, sort_items,
    text_key,
)
from blog_backend.services.content_store import ContentStore
from blog_backend.services.drafts import filter_published_only
from blog_backend.utils.text import calculate_reading_time, count_words, generate_excerpt, to_iso_string

router = APIRouter()


def serialize_post(post, authors, categories, tags):
    """把文章转换成仪表盘需要的结构，引用不到的作者/分类/标签使用兜底值"""
    author = authors.get(post.author.id)
    category = categories.get(post.category.id)
    word_count = count_words(post.body)
    resolved_tags = []
    for tag_ref in post.tags:
        tag = tags.get(tag_ref.id)
        resolved_tags.append({
            "id": tag_ref.id,
            "name": tag.name if tag else tag_ref.id,
            "description": tag.description if tag else None,
            "color": tag.color if tag else None,
            "slug": (tag.slug if tag else None) or tag_ref.id,
        })

    return {
        "slug": post.id,
        "title": post.title,
        "date": to_iso_string(post.pub_date),
        "description": post.description or '',
        "author": {
            "id": post.author.id,
            "name": author.name if author else 'Unknown',
            "bio": author.bio if author else None,
            "avatar": author.avatar if author else None,
            "email": author.email if author else None,
            "twitter": author.twitter if author else None,
            "github": author.github if author else None,
            "website": author.website if author else None,
        },
        "category": {
            "id": post.category.id,
            "name": category.name if category else 'Uncategorized',
            "description": category.description if category else None,
            "color": category.color if category else None,
            "slug": (category.slug if category else None) or post.category.id,
        },
        "tags": resolved_tags,
        "readingTime": calculate_reading_time(post.body),
        "wordCount": word_count,
        "featured": post.featured,
        "status": post.status,
        "path": f"src/content/blog/{post.id}",
        "excerpt": post.description or generate_excerpt(post.body),
        "image": post.image.model_dump() if post.image else None,
        "sha": post.id,
    }


@router.options("/posts.json")
def posts_preflight():
    return preflight_response()


@router.get("/posts.json", dependencies=[Depends(require_api_key)])
def list_posts(
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, alias="perPage"),
    sort_by: str = Query("date", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    search: str = "",
    category: str = "",
    tag: str = "",
    featured: str | None = None,
    status: str = "published",
    store: ContentStore = Depends(get_store),
):
    """
    文章列表。status=published（默认）只返回已发布文章，其他值返回全部。
    search 匹配标题、描述和正文；sortBy 支持 date / title。
    """
    with fetch_errors('Failed to fetch posts'):
        posts = store.get_collection("blog", filter_published_only if status == 'published' else None)

        if search:
            term = search.lower()
            posts = [
                post for post in posts
                if term in post.title.lower() or term in (post.description or '').lower() or term in post.body.lower()
            ]
        if category:
            posts = [post for post in posts if post.category.id == category]
        if tag:
            posts = [post for post in posts if tag in post.tag_ids()]
        if featured is not None:
            posts = [post for post in posts if post.featured == bool_param(featured)]

        authors = {author.id: author for author in store.get_collection("authors")}
        categories = {entry.id: entry for entry in store.get_collection("categories")}
        tags = {entry.id: entry for entry in store.get_collection("tags")}
        items = [serialize_post(post, authors, categories, tags) for post in posts]
        items = sort_items(items, sort_by, sort_order, {
            "date": lambda item: item["date"],
            "title": text_key("title"),
        }, default="date")

        return api_response(items, page, per_page, {
            "search": search or None,
            "category": category or None,
            "tag": tag or None,
            "featured": featured or None,
            "status": status or None,
        })
