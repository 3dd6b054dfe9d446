"""
SEO 数据生成
============

每个生成函数的优先级：条目自定义 seo -> 条目描述 -> 模板字符串 -> 站点默认值。
出错时（设置缺失、集合读取失败等）默认返回最小化的兜底数据；
strict=True 时直接抛出底层异常，供需要感知错误的调用方（如仪表盘）使用。
"""

import logging

from blog_backend.models.seo import OgImage, SEOData
from blog_backend.utils.text import to_iso_string

DEFAULT_OG_IMAGE = "/og-image.jpg"
LISTING_PAGE_SIZE = 5


class SeoService:
    """基于 BlogService 的 SEO 数据生成"""

    def __init__(self, blog):
        self.blog = blog
        self.store = blog.store

    def _degrade(self, what, error, strict, fallback):
        if strict:
            raise error
        logging.error(f"生成 {what} SEO 数据失败，使用兜底数据: {str(error)}")
        return fallback()

    # ---------- 博客列表 ----------

    def generate_blog_listing_seo(self, current_page=1, total_pages=1, strict=False) -> SEOData:
        try:
            return self._blog_listing_seo(current_page, total_pages)
        except Exception as e:
            return self._degrade("博客列表", e, strict, lambda: SEOData(
                page_title="All Posts - Website",
                description="Browse all blog posts.",
                ogimage=OgImage(url=DEFAULT_OG_IMAGE, alt="All Posts"),
                canonical_url="/blog" if current_page == 1 else f"/blog/{current_page}",
            ))

    def _blog_listing_seo(self, current_page, total_pages):
        settings = self.blog.get_site_settings()
        page = self.blog.get_page_data("all-posts")
        page_seo = page.seo if page else None
        site_name = settings.site_name

        if current_page == 1:
            page_title = (page_seo and page_seo.title) or f"All Posts - {site_name}"
            description = (page_seo and page_seo.description) or f"Browse all blog posts from {site_name}."
        else:
            page_title = f"All Posts - Page {current_page} - {site_name}"
            description = f"Browse blog posts from {site_name} - Page {current_page} of {total_pages}."

        page_suffix = f" - Page {current_page}" if current_page > 1 else ""
        ogimage = OgImage(
            url=(page_seo and page_seo.og_image) or settings.default_og_image or DEFAULT_OG_IMAGE,
            alt=f"{site_name} - All Posts{page_suffix}",
        )

        prev_url = None
        if current_page > 1:
            prev_url = f"{settings.site_url}/blog" if current_page == 2 else f"{settings.site_url}/blog/{current_page - 1}"
        next_url = f"{settings.site_url}/blog/{current_page + 1}" if current_page < total_pages else None

        return SEOData(
            page_title=page_title,
            description=description,
            ogimage=ogimage,
            canonical_url=f"{settings.site_url}/blog" + (f"/{current_page}" if current_page > 1 else ""),
            prev_url=prev_url,
            next_url=next_url,
        )

    # ---------- 分类 / 标签 ----------

    def generate_category_seo(self, category_slug, strict=False) -> SEOData:
        try:
            return self._taxonomy_seo(
                "categories", category_slug,
                title=lambda name, site: f"{name} Posts - {site}",
                description=lambda name, site: f"Browse all posts in the {name} category from {site}.",
                alt=lambda name, site: f"{site} - {name} Posts",
            )
        except Exception as e:
            return self._degrade(f"分类 {category_slug}", e, strict, lambda: SEOData(
                page_title=f"{category_slug} Posts - Website",
                description=f"Browse all posts in the {category_slug} category.",
                ogimage=OgImage(url=DEFAULT_OG_IMAGE, alt=f"{category_slug} Posts"),
                canonical_url=f"/categories/{category_slug}",
            ))

    def generate_tag_seo(self, tag_slug, strict=False) -> SEOData:
        try:
            return self._taxonomy_seo(
                "tags", tag_slug,
                title=lambda name, site: f"Posts tagged with: {name} - {site}",
                description=lambda name, site: f"Browse all posts tagged with {name} from {site}.",
                alt=lambda name, site: f"{site} - Posts tagged with {name}",
            )
        except Exception as e:
            return self._degrade(f"标签 {tag_slug}", e, strict, lambda: SEOData(
                page_title=f"{tag_slug} Posts - Website",
                description=f"Browse all posts tagged with {tag_slug}.",
                ogimage=OgImage(url=DEFAULT_OG_IMAGE, alt=f"{tag_slug} Posts"),
                canonical_url=f"/tags/{tag_slug}",
                og_image=DEFAULT_OG_IMAGE,
                og_image_alt=f"{tag_slug} Posts",
            ))

    def _taxonomy_seo(self, collection, slug, title, description, alt):
        """分类与标签共用：找不到条目时用 slug 作为名称"""
        settings = self.blog.get_site_settings()
        entry = next((item for item in self.store.get_collection(collection) if item.url_slug == slug), None)
        name = entry.name if entry else slug
        entry_description = entry.description if entry else None
        site_name = settings.site_name
        default_image = settings.default_og_image or DEFAULT_OG_IMAGE
        section = "categories" if collection == "categories" else "tags"
        canonical_url = f"{settings.site_url}/{section}/{slug}"

        if entry and entry.seo:
            custom = entry.seo
            return SEOData(
                page_title=custom.title or title(name, site_name),
                description=custom.description or entry_description or description(name, site_name),
                ogimage=OgImage(url=custom.og_image or default_image, alt=custom.og_image_alt or alt(name, site_name)),
                canonical_url=canonical_url,
                keywords=custom.keywords or None,
                og_image=custom.og_image,
                og_image_alt=custom.og_image_alt,
            )

        return SEOData(
            page_title=title(name, site_name),
            description=entry_description or description(name, site_name),
            ogimage=OgImage(url=default_image, alt=alt(name, site_name)),
            canonical_url=canonical_url,
        )

    # ---------- 作者 / 首页 ----------

    def generate_author_seo(self, author, strict=False) -> SEOData:
        try:
            settings = self.blog.get_site_settings()
            return SEOData(
                page_title=f"{author.name} - Author",
                description=author.bio or f"Articles by {author.name} on {settings.site_name}",
                ogimage=OgImage(
                    url=author.avatar or settings.default_og_image or DEFAULT_OG_IMAGE,
                    alt=f"{author.name} - Author at {settings.site_name}",
                ),
                canonical_url=f"{settings.site_url}/authors/{author.slug}",
            )
        except Exception as e:
            name = getattr(author, "name", None) or "Unknown"
            slug = getattr(author, "slug", None) or ""
            return self._degrade(f"作者 {getattr(author, 'id', None)}", e, strict, lambda: SEOData(
                page_title=f"{name} - Author",
                description=getattr(author, "bio", None) or f"Articles by {name}",
                ogimage=OgImage(url=getattr(author, "avatar", None) or DEFAULT_OG_IMAGE, alt=f"{name} - Author"),
                canonical_url=f"/authors/{slug}",
            ))

    def generate_homepage_seo(self, strict=False) -> SEOData:
        try:
            settings = self.blog.get_site_settings()
            return SEOData(
                page_title=settings.site_title or f"{settings.site_name} - {settings.site_description}",
                description=settings.site_description,
                ogimage=OgImage(
                    url=settings.default_og_image or DEFAULT_OG_IMAGE,
                    alt=f"{settings.site_name} - Lightning-fast blog platform built with Astro.",
                ),
                canonical_url=settings.site_url,
            )
        except Exception as e:
            return self._degrade("首页", e, strict, lambda: SEOData(
                page_title="Website",
                description="",
                ogimage=OgImage(url=DEFAULT_OG_IMAGE, alt="Website"),
                canonical_url="/",
            ))

    # ---------- 列表页结构化数据 ----------

    def generate_blog_listing_schema(self, posts, current_page=1, page_size=LISTING_PAGE_SIZE):
        """博客列表页的 Blog + ItemList 结构化数据"""
        settings = self.blog.get_site_settings()
        offset = (current_page - 1) * page_size
        return {
            "@context": "https://schema.org",
            "@type": "Blog",
            "name": f"{settings.site_name} Blog",
            "description": settings.site_description,
            "url": f"{settings.site_url}/blog",
            "author": {"@type": "Person", "name": settings.author},
            "publisher": {"@type": "Organization", "name": settings.site_name, "url": settings.site_url},
            "mainEntity": {
                "@type": "ItemList",
                "numberOfItems": len(posts),
                "itemListOrder": "https://schema.org/ItemListOrderDescending",
                "itemListElement": [
                    {
                        "@type": "ListItem",
                        "position": offset + index + 1,
                        "item": {
                            "@type": "BlogPosting",
                            "headline": post.title,
                            "description": post.description,
                            "url": f"{settings.site_url}/blog/{post.id}",
                            "datePublished": to_iso_string(post.pub_date),
                            "author": {"@type": "Person", "name": settings.author},
                            "publisher": {"@type": "Organization", "name": settings.site_name},
                        },
                    }
                    for index, post in enumerate(posts)
                ],
            },
        }
