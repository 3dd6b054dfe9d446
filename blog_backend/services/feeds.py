"""
RSS 2.0 订阅源与 robots.txt 生成
"""

import logging
from datetime import datetime, timezone
from email.utils import format_datetime
from urllib.parse import urljoin
from xml.sax.saxutils import escape, quoteattr

from blog_backend.services.blog_logic import BlogService

DEFAULT_SITE_NAME = 'My Blog'
DEFAULT_DESCRIPTION = 'A blog built with Astro'
DEFAULT_SITE_URL = 'https://example.com'
DEFAULT_EMAIL = 'hello@example.com'
DEFAULT_OWNER = 'Blog Owner'
GENERATOR = 'blog-content-center'


def _rfc822(value: datetime) -> str:
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def generate_rss_feed(blog: BlogService, now=None):
    """
    生成 RSS XML 字符串。站点设置中没有开启 rss 时返回 None。
    文章按草稿规则过滤、按时间倒序，数量受 rss.itemsPerPage 限制。
    """
    settings_list = blog.store.get_collection("settings")
    settings = settings_list[0] if settings_list else None
    if settings is None or settings.rss is None or not settings.rss.enabled:
        logging.info("RSS 未启用")
        return None

    posts = blog.get_all_posts()[:settings.rss.items_per_page or 20]
    authors = {author.id: author for author in blog.store.get_collection("authors")}
    categories = blog.store.get_collection("categories")
    category_map = {category.id: category for category in categories}
    tag_map = {tag.id: tag for tag in blog.store.get_collection("tags")}

    site_url = (settings.site_url or DEFAULT_SITE_URL).rstrip('/')
    site_name = settings.site_name or DEFAULT_SITE_NAME
    description = settings.site_description or DEFAULT_DESCRIPTION
    email = settings.email or DEFAULT_EMAIL
    owner = f"{email} ({settings.author or DEFAULT_OWNER})"
    logo_url = f"{site_url}{settings.logo}" if settings.logo else f"{site_url}/og-image.jpg"
    now = now or datetime.now(timezone.utc)

    channel_categories = ''.join(f"<category>{escape(category.name)}</category>\n" for category in categories)
    rss_content = f'''<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
<channel>
<title>{escape(site_name)}</title>
<description>{escape(description)}</description>
<link>{escape(site_url)}/</link>
<language>en-US</language>
<managingEditor>{escape(owner)}</managingEditor>
<webMaster>{escape(owner)}</webMaster>
{channel_categories}<docs>https://www.rssboard.org/rss-specification</docs>
<generator>{GENERATOR}</generator>
<ttl>60</ttl>
<lastBuildDate>{_rfc822(now)}</lastBuildDate>
<image>
<url>{escape(logo_url)}</url>
<title>{escape(site_name)}</title>
<link>{escape(site_url)}</link>
<description>{escape(description)}</description>
<width>144</width>
<height>144</height>
</image>
'''

    for post in posts:
        link = f"{site_url}/blog/{post.id}"
        author = authors.get(post.author.id)
        item_author = f"{email} ({author.name})" if author else email
        category = category_map.get(post.category.id)
        names = [category.name] if category else []
        for tag_ref in post.tags:
            tag = tag_map.get(tag_ref.id)
            names.append(tag.name if tag else tag_ref.id)

        rss_content += f'''<item>
<title>{escape(post.title)}</title>
<link>{escape(link)}</link>
<guid isPermaLink="true">{escape(link)}</guid>
<description>{escape(post.description or '')}</description>
<pubDate>{_rfc822(post.pub_date)}</pubDate>
<author>{escape(item_author)}</author>
'''
        rss_content += ''.join(f"<category>{escape(name)}</category>\n" for name in names if name)
        if post.image:
            rss_content += f'<enclosure url={quoteattr(site_url + post.image.url)} type="image/jpeg" />\n'
        rss_content += '</item>\n'

    rss_content += '</channel>\n</rss>\n'
    logging.info(f"RSS 生成完成，共 {len(posts)} 篇文章")
    return rss_content


def generate_robots_txt(base_url):
    """允许全部抓取，屏蔽 /api/，并指向 sitemap-index.xml"""
    sitemap_url = urljoin(base_url, 'sitemap-index.xml')
    return (
        "User-agent: *\n"
        "Allow: /\n"
        "\n"
        "# Block API endpoints from being indexed\n"
        "Disallow: /api/\n"
        "\n"
        f"Sitemap: {sitemap_url}\n"
    )
