"""
联盟推广接口
- /api/affiliate-categories.json
- /api/affiliate-products/{category}.json
- /api/affiliate-comparisons/{category}.json
"""

import logging
from collections import Counter
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query

from blog_backend.api.common import (
    ApiError, api_response, bool_param, discount_percent, fetch_errors, get_store, parse_price,
    preflight_response, require_api_key, sort_items, text_key,
)
from blog_backend.services.content_store import ContentStore
from blog_backend.utils.text import to_iso_string

router = APIRouter()

FEATURED_MIN_PRODUCTS = 3
FEATURED_MIN_RATING = 4.5


def _find_category(store, category):
    if not category or not category.strip():
        raise ApiError(400, 'Category parameter is required', 'MISSING_CATEGORY')
    entry = store.get_entry("affiliateCategories", category)
    if entry is None:
        raise ApiError(404, f'Category "{category}" not found', 'CATEGORY_NOT_FOUND')
    return entry


def serialize_product(product):
    return {
        "id": product.id,
        "title": product.title,
        "description": product.description,
        "price": product.price,
        "originalPrice": product.original_price,
        "discountPercent": discount_percent(product.price, product.original_price),
        "affiliateUrl": product.affiliate_url,
        "image": product.image,
        "imageAlt": product.image_alt,
        "category": product.category.id,
        "rating": product.rating,
        "reviewCount": product.review_count,
        "brand": product.brand,
        "features": product.features,
        "pros": product.pros,
        "cons": product.cons,
        "badge": product.badge,
        "buttonText": product.button_text,
        "featured": bool(product.badge) or (product.rating or 0) >= FEATURED_MIN_RATING,
    }


@router.options("/affiliate-categories.json")
def affiliate_categories_preflight():
    return preflight_response()


@router.get("/affiliate-categories.json", dependencies=[Depends(require_api_key)])
def list_affiliate_categories(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, alias="perPage"),
    sort_by: str = Query("name", alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder"),
    search: str = "",
    featured: str | None = None,
    active: str | None = None,
    store: ContentStore = Depends(get_store),
):
    """推广分类及其商品数；所有分类都视为启用，active=false 返回空列表"""
    with fetch_errors('Failed to fetch affiliate categories'):
        categories = store.get_collection("affiliateCategories")
        product_counts = Counter(product.category.id for product in store.get_collection("affiliateProducts"))
        now = to_iso_string(datetime.now(timezone.utc))

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
            count = product_counts.get(category.id, 0)
            items.append({
                "id": category.id,
                "name": category.name,
                "description": category.description,
                "color": category.color,
                "productCount": count,
                "lastUpdated": now if count else None,
                "featured": count >= FEATURED_MIN_PRODUCTS,
                "active": True,
            })

        if featured is not None:
            items = [item for item in items if item["featured"] == bool_param(featured)]
        if active is not None and not bool_param(active):
            items = []

        items = sort_items(items, sort_by, sort_order, {
            "name": text_key("name"),
            "productCount": lambda item: item["productCount"],
            "lastUpdated": lambda item: item["lastUpdated"] or '',
        }, default="name")

        return api_response(items, page, per_page, {
            "search": search or None,
            "featured": featured,
            "active": active,
        })


@router.options("/affiliate-products/{category}.json")
def affiliate_products_preflight(category: str):
    return preflight_response()


@router.get("/affiliate-products/{category}.json", dependencies=[Depends(require_api_key)])
def list_affiliate_products(
    category: str,
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, alias="perPage"),
    sort_by: str = Query("title", alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder"),
    search: str = "",
    featured: str | None = None,
    active: str | None = None,
    brand: str = "",
    store: ContentStore = Depends(get_store),
):
    """某个推广分类下的商品；sortBy 支持 title / price / rating / brand，dateAdded 按标题排序"""
    with fetch_errors(f'Failed to fetch products for category "{category}"'):
        entry = _find_category(store, category)
        products = store.get_collection(
            "affiliateProducts", lambda product: product.category.id == entry.id,
        )

        if search:
            term = search.lower()
            products = [
                product for product in products
                if term in product.title.lower()
                or term in product.description.lower()
                or term in (product.brand or '').lower()
            ]
        if brand:
            products = [product for product in products if (product.brand or '').lower() == brand.lower()]

        items = [serialize_product(product) for product in products]
        if featured is not None:
            items = [item for item in items if item["featured"] == bool_param(featured)]
        if active is not None and not bool_param(active):
            items = []

        items = sort_items(items, sort_by, sort_order, {
            "title": text_key("title"),
            "dateAdded": text_key("title"),
            "price": lambda item: parse_price(item["price"]) or 0,
            "rating": lambda item: item["rating"] or 0,
            "brand": text_key("brand"),
        }, default="title")

        return api_response(items, page, per_page, {
            "search": search or None,
            "featured": featured,
            "active": active,
            "brand": brand or None,
        }, category={
            "id": entry.id,
            "name": entry.name,
            "description": entry.description,
            "color": entry.color,
            "productCount": len(products),
        })


@router.options("/affiliate-comparisons/{category}.json")
def affiliate_comparisons_preflight(category: str):
    return preflight_response()


@router.get("/affiliate-comparisons/{category}.json", dependencies=[Depends(require_api_key)])
def list_affiliate_comparisons(
    category: str,
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, alias="perPage"),
    sort_by: str = Query("title", alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder"),
    search: str = "",
    featured: str | None = None,
    active: str | None = None,
    store: ContentStore = Depends(get_store),
):
    """
    某个推广分类下的对比表，商品引用会被展开；找不到的商品跳过并记录警告。
    对比表没有推荐标记，featured=true 返回空列表。
    """
    with fetch_errors(f'Failed to fetch comparisons for category "{category}"'):
        entry = _find_category(store, category)
        comparisons = store.get_collection(
            "affiliateComparisons",
            lambda comparison: comparison.category is not None and comparison.category.id == entry.id,
        )
        products = {product.id: product for product in store.get_collection("affiliateProducts")}

        if search:
            term = search.lower()
            comparisons = [
                comparison for comparison in comparisons
                if term in comparison.title.lower() or term in (comparison.description or '').lower()
            ]
        if active is not None:
            comparisons = [comparison for comparison in comparisons if comparison.active == bool_param(active)]
        if featured is not None and bool_param(featured):
            comparisons = []

        items = []
        for comparison in comparisons:
            resolved = []
            for ref in comparison.products:
                product = products.get(ref.id)
                if product is None:
                    logging.warning(f"对比表 {comparison.id} 引用的商品不存在: {ref.id}")
                    continue
                resolved.append(serialize_product(product))
            items.append({
                "id": comparison.id,
                "title": comparison.title,
                "description": comparison.description,
                "category": entry.id,
                "active": comparison.active,
                "featured": False,
                "products": resolved,
                "productCount": len(resolved),
            })

        items = sort_items(items, sort_by, sort_order, {
            "title": text_key("title"),
            "dateCreated": text_key("title"),
            "productCount": lambda item: item["productCount"],
        }, default="title")

        return api_response(items, page, per_page, {
            "search": search or None,
            "featured": featured,
            "active": active,
        }, category={
            "id": entry.id,
            "name": entry.name,
            "description": entry.description,
            "color": entry.color,
            "comparisonCount": len(comparisons),
        })
