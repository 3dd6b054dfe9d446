"""
schema.org（JSON-LD）结构化数据生成
=================================

- 纯函数：Person / Article / BlogPosting / Organization / ImageObject
- SchemaService：需要读取内容集合的作者页、作者列表页、文章页结构化数据
"""

import logging
from datetime import datetime
from urllib.parse import urlsplit

from blog_backend.models.common import coerce_date
from blog_backend.models.site import SiteSettings
from blog_backend.models.taxonomy import Author, Category, Tag
from blog_backend.services.faq import generate_faq_schema, parse_faq_from_content, validate_faq_data
from blog_backend.utils.text import to_iso_string

SCHEMA_CONTEXT = "https://schema.org"


def _strip_at(handle):
    # 只去掉第一个 @
    return handle.replace('@', '', 1)


def _with_prefix(value, prefix):
    return value if value.startswith('http') else f"{prefix}{value}"


def generate_person_schema(author: Author) -> dict:
    same_as = []
    if author.twitter:
        same_as.append(f"https://twitter.com/{_strip_at(author.twitter)}")
    if author.github:
        same_as.append(f"https://github.com/{author.github}")

    schema = {"@context": SCHEMA_CONTEXT, "@type": "Person", "name": author.name}
    if author.bio:
        schema["description"] = author.bio
    if author.avatar:
        schema["image"] = author.avatar
    if author.email:
        schema["email"] = author.email
    if author.website:
        schema["url"] = author.website
    if same_as:
        schema["sameAs"] = same_as
    return schema


def generate_image_schema(image) -> dict:
    return {
        "@type": "ImageObject",
        "url": image.url,
        "name": image.alt,
        "description": image.alt,
    }


def generate_article_schema(frontmatter: dict, url, settings) -> dict:
    """
    frontmatter 中的 author / category / tags 需要已经解析成模型对象：
    {"title", "description", "pub_date", "author": Author, "category": Category, "tags": [Tag], "image"}
    """
    author = frontmatter["author"]
    author_schema = {"@type": "Person", "name": author.name}
    if author.bio:
        author_schema["description"] = author.bio
    if author.website:
        author_schema["url"] = author.website
    if author.email:
        author_schema["email"] = author.email

    published = to_iso_string(frontmatter["pub_date"])
    schema = {
        "@context": SCHEMA_CONTEXT,
        "@type": "Article",
        "headline": frontmatter["title"],
        "description": frontmatter["description"],
        "author": author_schema,
        "publisher": {"@type": "Organization", "name": settings.site_name, "url": settings.site_url},
        "datePublished": published,
        "dateModified": published,
        "mainEntityOfPage": {"@type": "WebPage", "@id": url},
        "url": url,
        "keywords": [tag.name for tag in frontmatter.get("tags", [])],
    }
    if frontmatter.get("image"):
        schema["image"] = generate_image_schema(frontmatter["image"])
    category = frontmatter.get("category")
    if category and category.name:
        schema["articleSection"] = category.name
    return schema


def generate_blog_posting_schema(frontmatter: dict, url, settings) -> dict:
    return {**generate_article_schema(frontmatter, url, settings), "@type": "BlogPosting"}


def _social_same_as(social):
    same_as = []
    if social.twitter:
        same_as.append(f"https://twitter.com/{_strip_at(social.twitter)}")
    if social.github:
        same_as.append(_with_prefix(social.github, "https://github.com/"))
    if social.linkedin:
        same_as.append(_with_prefix(social.linkedin, "https://linkedin.com/company/"))
    if social.facebook:
        same_as.append(_with_prefix(social.facebook, "https://facebook.com/"))
    if social.instagram:
        same_as.append(f"https://instagram.com/{_strip_at(social.instagram)}")
    if social.youtube:
        same_as.append(_with_prefix(social.youtube, "https://youtube.com/@"))
    if social.tiktok:
        same_as.append(f"https://tiktok.com/@{_strip_at(social.tiktok)}")
    if social.discord:
        same_as.append(_with_prefix(social.discord, "https://discord.gg/"))
    if social.reddit:
        same_as.append(_with_prefix(social.reddit, "https://reddit.com/r/"))
    if social.mastodon:
        if social.mastodon.startswith('http'):
            same_as.append(social.mastodon)
        elif '@' in social.mastodon:
            # @user@instance.social -> https://instance.social/@user
            parts = _strip_at(social.mastodon).split('@')
            if len(parts) == 2:
                same_as.append(f"https://{parts[1]}/@{parts[0]}")
    return same_as


def generate_organization_schema(settings) -> dict:
    schema = {"@context": SCHEMA_CONTEXT, "@type": "Organization", "name": settings.site_name, "url": settings.site_url}
    if settings.logo:
        schema["logo"] = settings.logo
    same_as = _social_same_as(settings.social) if settings.social else []
    if same_as:
        schema["sameAs"] = same_as
    if settings.email:
        schema["contactPoint"] = {
            "@type": "ContactPoint",
            "email": settings.email,
            "contactType": "customer service",
        }
    return schema


def _minimal_post_schema(frontmatter, url, schema_type, author, settings) -> dict:
    schema = {
        "@context": SCHEMA_CONTEXT,
        "@type": schema_type,
        "headline": frontmatter["title"],
        "description": frontmatter["description"],
        "author": {"@type": "Person", "name": author.name},
        "publisher": {"@type": "Organization", "name": settings.site_name, "url": settings.site_url},
    }
    # 日期无法解析时省略发布时间
    pub_date = coerce_date(frontmatter.get("pub_date"))
    if isinstance(pub_date, datetime):
        schema["datePublished"] = schema["dateModified"] = to_iso_string(pub_date)
    schema["url"] = url
    return schema


class SchemaService:
    """需要读取作者 / 分类 / 标签 / 站点设置的结构化数据"""

    def __init__(self, store):
        self.store = store

    def _site_settings(self):
        """站点设置读取失败时返回 None，由调用方决定兜底方式"""
        try:
            settings = self.store.get_collection("settings")
        except Exception as e:
            logging.warning(f"读取站点设置失败: {str(e)}")
            return None
        return settings[0] if settings else None

    def _safe_entry(self, collection, entry_id):
        try:
            return self.store.get_entry(collection, entry_id)
        except Exception as e:
            logging.warning(f"读取 {collection} 条目 {entry_id} 失败: {str(e)}")
            return None

    def generate_author_schema_data(self, author, url, post_count=0):
        """作者页的 Person 结构化数据；作者没有名字时返回 None"""
        if author is None or not author.name:
            logging.warning("作者数据无效，不生成结构化数据")
            return None

        settings = self._site_settings()
        schema = {**generate_person_schema(author), "@id": url, "url": url}
        if settings:
            schema["jobTitle"] = f"Author at {settings.site_name}"
            schema["worksFor"] = {"@type": "Organization", "name": settings.site_name, "url": settings.site_url}
        if post_count > 0:
            schema["knowsAbout"] = f"Content creation and writing - {post_count} published articles"
        schema["mainEntityOfPage"] = {"@type": "ProfilePage", "@id": url, "url": url}
        return schema

    def generate_authors_list_schema_data(self, authors, url):
        """
        作者列表页的 CollectionPage 结构化数据。
        authors 为 (Author, post_count) 序列，例如 BlogService.get_authors_with_post_counts 的结果。
        """
        if not authors:
            logging.warning("作者列表为空，不生成结构化数据")
            return None

        settings = self._site_settings()
        site_url = settings.site_url if settings else ''
        site_name = settings.site_name if settings else None

        author_schemas = []
        for author, post_count in authors:
            author_url = f"{site_url}/authors/{author.id}"
            schema = {**generate_person_schema(author), "@id": author_url, "url": author_url}
            if settings:
                schema["jobTitle"] = f"Author at {site_name}"
                schema["worksFor"] = {"@type": "Organization", "name": site_name, "url": site_url}
            if post_count > 0:
                schema["knowsAbout"] = f"Content creation and writing - {post_count} published articles"
            author_schemas.append(schema)

        result = {
            "@context": SCHEMA_CONTEXT,
            "@type": "CollectionPage",
            "@id": url,
            "url": url,
            "name": f"Authors - {site_name or 'Website'}",
            "description": f"Meet the talented authors contributing to {site_name or 'our website'}",
            "mainEntity": {
                "@type": "ItemList",
                "numberOfItems": len(author_schemas),
                "itemListElement": [
                    {"@type": "ListItem", "position": index + 1, "item": schema}
                    for index, schema in enumerate(author_schemas)
                ],
            },
        }
        if settings:
            result["isPartOf"] = {"@type": "WebSite", "name": site_name, "url": site_url}
        result["breadcrumb"] = {
            "@type": "BreadcrumbList",
            "itemListElement": [
                {"@type": "ListItem", "position": 1, "name": "Home", "item": site_url or url.replace('/authors', '')},
                {"@type": "ListItem", "position": 2, "name": "Authors", "item": url},
            ],
        }
        return result

    def generate_blog_post_schema_data(self, frontmatter: dict, url, schema_type="Article", content=None):
        """
        文章页结构化数据。frontmatter 为 extract_frontmatter 的结果（引用均为 id）。
        未发布或缺少标题/描述时返回 None；正文含 FAQ 时返回 [主结构化数据, FAQPage]。
        主结构化数据生成失败时退回最小化的结构，其他意外错误返回 None。
        """
        try:
            return self._blog_post_schema_data(frontmatter, url, schema_type, content)
        except Exception as e:
            logging.error(f"生成文章结构化数据时出现意外错误: {str(e)}")
            return None

    def _blog_post_schema_data(self, frontmatter, url, schema_type, content):
        if not frontmatter or not frontmatter.get("title") or not frontmatter.get("description"):
            logging.warning("文章缺少标题或描述，不生成结构化数据")
            return None
        if frontmatter.get("status") != "published":
            return None

        author_id = frontmatter.get("author")
        author = self._safe_entry("authors", author_id) if author_id else None
        if author is None:
            author = Author(id=author_id or 'anonymous', name=author_id or 'Anonymous Author')

        category_id = frontmatter.get("category")
        category = self._safe_entry("categories", category_id) if category_id else None
        if category is None:
            category = Category(id=category_id or 'general', name=category_id or 'General')

        tag_ids = frontmatter.get("tags") or []
        tags = [tag for tag in (self._safe_entry("tags", tag_id) for tag_id in tag_ids if tag_id) if tag]
        if not tags:
            tags = [Tag(id=tag_id, name=tag_id) for tag_id in tag_ids]

        settings = self._site_settings()
        if settings is None:
            parts = urlsplit(url)
            settings = SiteSettings(
                site_name='Website',
                site_description='A website',
                site_url=f"{parts.scheme}://{parts.netloc}",
                author='Website Author',
                email='contact@example.com',
            )

        faq_schema = None
        if content:
            faq_data = parse_faq_from_content(content)
            if faq_data and validate_faq_data(faq_data):
                faq_schema = generate_faq_schema(faq_data)

        enhanced = {**frontmatter, "author": author, "category": category, "tags": tags}
        try:
            if schema_type == "BlogPosting":
                main_schema = generate_blog_posting_schema(enhanced, url, settings)
            else:
                main_schema = generate_article_schema(enhanced, url, settings)
        except Exception as e:
            logging.error(f"生成 {schema_type} 结构化数据失败，使用最小化结构: {str(e)}")
            main_schema = _minimal_post_schema(frontmatter, url, schema_type, author, settings)

        return [main_schema, faq_schema] if faq_schema else main_schema
