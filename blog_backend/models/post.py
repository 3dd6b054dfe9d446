# 博客文章数据结构
from datetime import datetime
from typing import Literal

from pydantic import field_validator

from blog_backend.models.common import ContentModel, Reference, coerce_date
from blog_backend.utils.text import ensure_utc


class PostImage(ContentModel):
    url: str
    alt: str = ""


class Post(ContentModel):
    id: str
    title: str
    description: str
    pub_date: datetime
    author: Reference
    category: Reference
    tags: list[Reference] = []
    image: PostImage | None = None
    featured: bool = False
    status: Literal["draft", "published"] = "published"
    # Markdown 正文（front matter 之后的部分）
    body: str = ""

    @field_validator("pub_date", mode="before")
    @classmethod
    def parse_pub_date(cls, value):
        return coerce_date(value)

    @field_validator("pub_date")
    @classmethod
    def pub_date_utc(cls, value):
        return ensure_utc(value)

    @property
    def is_published(self):
        return self.status == "published"

    def tag_ids(self):
        return [tag.id for tag in self.tags]
