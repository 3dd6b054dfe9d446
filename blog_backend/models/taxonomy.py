# 作者 / 分类 / 标签
from pydantic import model_validator

from blog_backend.models.common import ContentModel, SEOOverride


class TaxonomyEntry(ContentModel):
    id: str
    name: str
    description: str | None = None
    color: str | None = None
    slug: str | None = None
    seo: SEOOverride | None = None

    @property
    def url_slug(self):
        return self.slug or self.id


class Category(TaxonomyEntry):
    pass


class Tag(TaxonomyEntry):
    pass


class Author(ContentModel):
    id: str
    name: str
    slug: str = ""
    bio: str | None = None
    avatar: str | None = None
    email: str | None = None
    twitter: str | None = None
    github: str | None = None
    website: str | None = None

    @model_validator(mode="after")
    def default_slug(self):
        if not self.slug:
            self.slug = self.id
        return self
