# SEO、分页、面包屑、FAQ 等派生数据结构（每次请求即时计算）
from typing import Any

from pydantic import BaseModel

from blog_backend.models.common import ContentModel


class OgImage(ContentModel):
    url: str
    alt: str


class SEOData(ContentModel):
    page_title: str
    description: str
    ogimage: OgImage
    canonical_url: str
    keywords: list[str] | None = None
    og_image: str | None = None
    og_image_alt: str | None = None
    prev_url: str | None = None
    next_url: str | None = None


class PaginationUrls(ContentModel):
    current: str
    first: str
    last: str
    prev: str | None = None
    next: str | None = None


class PaginatedData(ContentModel):
    data: list[Any]
    start: int
    end: int
    total: int
    current_page: int
    size: int
    last_page: int
    url: PaginationUrls


class BreadcrumbItem(BaseModel):
    name: str
    url: str | None = None
    position: int
    is_current_page: bool = False


class FAQItem(BaseModel):
    question: str
    answer: str


class FAQData(BaseModel):
    title: str
    items: list[FAQItem]
