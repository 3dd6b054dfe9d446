# 联盟推广：分类 / 商品 / 对比表
from pydantic import Field

from blog_backend.models.common import ContentModel, Reference


class AffiliateCategory(ContentModel):
    id: str
    name: str
    description: str | None = None
    color: str | None = None


class AffiliateProduct(ContentModel):
    id: str
    title: str
    description: str
    # 价格以展示字符串保存，如 "$129.99"
    price: str
    affiliate_url: str
    image: str = ""
    image_alt: str = ""
    category: Reference
    original_price: str | None = None
    rating: float | None = Field(default=None, ge=0, le=5)
    review_count: int | None = None
    brand: str | None = None
    features: list[str] = []
    pros: list[str] = []
    cons: list[str] = []
    badge: str | None = None
    button_text: str | None = None


class AffiliateComparison(ContentModel):
    id: str
    title: str
    products: list[Reference] = []
    description: str | None = None
    category: Reference | None = None
    active: bool = True
