# 独立页面列表接口 /api/pages.json
from fastapi import APIRouter, Depends, Query

from blog_backend.api.common import (
    api_response, bool_param, fetch_errors, get_store, preflight_response, require_api_key, sort_items,
    text_key,
)
from blog_backend.services.content_store import ContentStore

router = APIRouter()


@router.options("/pages.json")
def pages_preflight():
    return preflight_response()


@router.get("/pages.json", dependencies=[Depends(require_api_key)])
def list_pages(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, alias="perPage"),
    sort_by: str = Query("title", alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder"),
    search: str = "",
    published: str | None = None,
    noindex: str | None = None,
    type: str = "",
    store: ContentStore = Depends(get_store),
):
    with fetch_errors('Failed to fetch pages'):
        pages = store.get_collection("pages")

        if search:
            term = search.lower()
            pages = [
                entry for entry in pages
                if term in entry.title.lower()
                or term in (entry.description or '').lower()
                or term in entry.id.lower()
                or term in entry.slug.lower()
            ]
        if published is not None:
            pages = [entry for entry in pages if entry.published == bool_param(published)]
        if noindex is not None:
            pages = [entry for entry in pages if entry.noindex == bool_param(noindex)]
        if type:
            pages = [entry for entry in pages if entry.page_type == type]

        items = [{
            "id": entry.id,
            "title": entry.title,
            "slug": entry.slug,
            "description": entry.description,
            "published": entry.published,
            "noindex": entry.noindex,
            "seo": entry.seo.model_dump(by_alias=True) if entry.seo else None,
            "type": entry.page_type,
        } for entry in pages]

        items = sort_items(items, sort_by, sort_order, {
            "title": text_key("title"),
            "slug": text_key("slug"),
            "id": text_key("id"),
            "type": text_key("type"),
        }, default="title")

        return api_response(items, page, per_page, {
            "search": search or None,
            "published": published,
            "noindex": noindex,
            "type": type or None,
        })
