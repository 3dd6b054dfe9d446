# 站点设置、独立页面与法律页面
from datetime import datetime

from pydantic import field_validator

from blog_backend.models.common import ContentModel, SEOOverride, coerce_date
from blog_backend.utils.text import ensure_utc


class SocialLinks(ContentModel):
    twitter: str | None = None
    github: str | None = None
    linkedin: str | None = None
    facebook: str | None = None
    instagram: str | None = None
    youtube: str | None = None
    tiktok: str | None = None
    discord: str | None = None
    reddit: str | None = None
    mastodon: str | None = None


class ContactSettings(ContentModel):
    email: str | None = None
    alias: str | None = None


class RssSettings(ContentModel):
    enabled: bool = True
    items_per_page: int = 20


class ThemeSettings(ContentModel):
    primary_color: str = "#3b82f6"


class DisclaimerSettings(ContentModel):
    enabled: bool = False
    text: str | None = None


class SiteSettings(ContentModel):
    """站点设置单例；缺失字段在 BlogService.get_site_settings 中补默认值"""
    id: str = "site"
    site_name: str = ""
    site_title: str | None = None
    site_description: str = ""
    site_url: str = ""
    author: str = ""
    email: str = ""
    logo: str | None = None
    image_domain: str | None = None
    default_og_image: str = "/og-image.jpg"
    seo: dict | None = None
    social: SocialLinks | None = None
    contact: ContactSettings | None = None
    favicons: dict | None = None
    performance: dict | None = None
    analytics: dict | None = None
    rss: RssSettings | None = None
    theme: ThemeSettings | None = None
    disclaimer: DisclaimerSettings | None = None
    # 主题颜色 / 字体等，按分组保存：{"colors": {"primary": "#..."}}
    theme_settings: dict[str, dict[str, str]] | None = None


class PageSEO(ContentModel):
    title: str | None = None
    description: str | None = None
    og_image: str | None = None
    keywords: list[str] = []
    canonical: str | None = None


class Page(ContentModel):
    id: str
    title: str
    slug: str
    description: str | None = None
    content: str | None = None
    published: bool = True
    noindex: bool = False
    seo: PageSEO | None = None

    @property
    def page_type(self):
        # 隐私政策 / 服务条款归为 legal
        if 'privacy' in self.id or 'terms' in self.id:
            return 'legal'
        return 'page'


class LegalPage(ContentModel):
    id: str
    title: str
    description: str | None = None
    pub_date: datetime | None = None
    seo: SEOOverride | None = None
    body: str = ""

    @field_validator("pub_date", mode="before")
    @classmethod
    def parse_pub_date(cls, value):
        return coerce_date(value)

    @field_validator("pub_date")
    @classmethod
    def pub_date_utc(cls, value):
        return ensure_utc(value) if value else value
