"""
博客查询逻辑
============

- BlogService：文章 / 分类 / 标签 / 作者的查询、计数与静态路径生成
- PostIndex：一次请求内构建的 id -> 文章索引，避免对每个分类/标签重复扫描全部文章
- 相关文章打分：同分类 +3，每个共同标签 +1
"""

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import NamedTuple

from blog_backend.models.post import Post
from blog_backend.models.site import SiteSettings
from blog_backend.services.drafts import filter_drafts, filter_published_only, filter_published_pages
from blog_backend.services.pagination import create_pagination_data

DEFAULT_SITE_SETTINGS = {
    "site_name": "Blog",
    "site_description": "A blog built with Astro",
    "site_url": "https://example.com",
    "author": "Author",
    "email": "author@example.com",
    "default_og_image": "/og-image.jpg",
}

SAME_CATEGORY_SCORE = 3
SHARED_TAG_SCORE = 1


class TaxonomyCount(NamedTuple):
    entry: object
    post_count: int


def sort_newest_first(posts):
    return sorted(posts, key=lambda post: post.pub_date, reverse=True)


class PostIndex:
    """分类 / 标签 / 作者 id 到文章列表的映射，保持文章原有顺序"""

    def __init__(self, posts):
        self.by_category = defaultdict(list)
        self.by_tag = defaultdict(list)
        self.by_author = defaultdict(list)
        for post in posts:
            self.by_category[post.category.id].append(post)
            self.by_author[post.author.id].append(post)
            # 同一篇文章重复引用同一标签只计一次
            for tag_id in dict.fromkeys(post.tag_ids()):
                self.by_tag[tag_id].append(post)

    def category_posts(self, category_id):
        return self.by_category.get(category_id, [])

    def tag_posts(self, tag_id):
        return self.by_tag.get(tag_id, [])

    def author_posts(self, author_id):
        return self.by_author.get(author_id, [])


def score_related(current: Post, candidate: Post) -> int:
    score = 0
    if candidate.category.id == current.category.id:
        score += SAME_CATEGORY_SCORE
    current_tags = set(current.tag_ids())
    score += SHARED_TAG_SCORE * sum(1 for tag_id in candidate.tag_ids() if tag_id in current_tags)
    return score


def extract_frontmatter(post: Post) -> dict:
    """把文章转成只含 id 引用的扁平字典，供结构化数据生成使用"""
    return {
        "title": post.title,
        "author": post.author.id,
        "category": post.category.id,
        "description": post.description,
        "pub_date": post.pub_date,
        "image": post.image,
        "tags": post.tag_ids(),
        "featured": post.featured,
        "status": post.status,
    }


class BlogService:
    """博客内容查询；show_drafts 为 True 时相当于开发模式"""

    def __init__(self, store, show_drafts=False):
        self.store = store
        self.show_drafts = show_drafts

    # ---------- 文章 ----------

    def get_all_posts(self) -> list[Post]:
        """按草稿规则过滤后的全部文章，按发布时间倒序；读取失败直接抛出"""
        posts = self.store.get_collection("blog", lambda post: filter_drafts(post, self.show_drafts))
        return sort_newest_first(posts)

    def get_published_posts(self) -> list[Post]:
        return sort_newest_first(self.store.get_collection("blog", filter_published_only))

    def build_index(self, posts=None) -> PostIndex:
        return PostIndex(self.get_all_posts() if posts is None else posts)

    def get_featured_posts(self, limit=None):
        featured = [post for post in self.get_all_posts() if post.featured]
        return featured[:limit] if limit else featured

    def get_recent_posts(self, limit=5):
        return self.get_all_posts()[:limit]

    def get_related_posts(self, current_post: Post, limit=3) -> list[Post]:
        scored = [
            (post, score_related(current_post, post))
            for post in self.get_all_posts()
            if post.id != current_post.id
        ]
        scored = [item for item in scored if item[1] > 0]
        # sorted 是稳定排序，同分时保持原有顺序
        scored.sort(key=lambda item: item[1], reverse=True)
        return [post for post, _ in scored[:limit]]

    def search_posts(self, query, limit=None):
        if not query.strip():
            return []
        term = query.lower()
        matches = [
            post for post in self.get_all_posts()
            if term in post.title.lower() or term in (post.description or '').lower()
        ]
        return matches[:limit] if limit else matches

    def get_blog_stats(self):
        posts = self.get_all_posts()
        now = datetime.now(timezone.utc)
        return {
            "totalPosts": len(posts),
            "totalCategories": len(self.store.get_collection("categories")),
            "totalTags": len(self.store.get_collection("tags")),
            "totalAuthors": len(self.store.get_collection("authors")),
            "featuredPosts": sum(1 for post in posts if post.featured),
            "publishedThisMonth": sum(
                1 for post in posts
                if post.pub_date.year == now.year and post.pub_date.month == now.month
            ),
            "averagePostsPerMonth": round(len(posts) / 12),
        }

    def generate_blog_pagination_paths(self, page_size=5):
        posts = self.get_all_posts()
        last_page = create_pagination_data(posts, 1, page_size).last_page
        return [
            {"params": {"page": str(page)}, "props": {"page": create_pagination_data(posts, page, page_size)}}
            for page in range(1, last_page + 1)
        ]

    # ---------- 站点设置与页面 ----------

    def get_site_settings(self) -> SiteSettings:
        """第一条设置记录，必填字段为空时使用默认值"""
        settings = self.store.get_collection("settings")
        if not settings:
            return SiteSettings(**DEFAULT_SITE_SETTINGS)
        current = settings[0]
        update = {
            field: getattr(current, field) or default
            for field, default in DEFAULT_SITE_SETTINGS.items()
        }
        return current.model_copy(update=update)

    def get_page_data(self, page_id, strict=True):
        """按 id 获取页面；strict=False 时读取失败返回 None"""
        try:
            return self.store.get_entry("pages", page_id)
        except Exception as e:
            logging.error(f"获取页面数据失败 {page_id}: {str(e)}")
            if strict:
                raise
            return None

    def get_published_pages(self):
        return self.store.get_collection("pages", filter_published_pages)

    def _find_page_by_slug(self, slug):
        return next((page for page in self.store.get_collection("pages") if page.slug == slug), None)

    def should_index_page(self, slug):
        """pages.json 中没有的页面默认允许收录"""
        page = self._find_page_by_slug(slug)
        return True if page is None else not page.noindex

    def is_page_published(self, slug):
        page = self._find_page_by_slug(slug)
        return page.published if page else False

    def get_legal_page(self, slug):
        return self.store.get_entry("legal", slug)

    # ---------- 分类 ----------

    def get_posts_by_category(self, category_id):
        return [post for post in self.get_all_posts() if post.category.id == category_id]

    def get_categories_with_post_counts(self, index=None) -> list[TaxonomyCount]:
        """有文章的分类及文章数，按数量倒序；引用不存在的分类的文章不会被计入"""
        index = index or self.build_index()
        counts = [
            TaxonomyCount(category, len(index.category_posts(category.id)))
            for category in self.store.get_collection("categories")
        ]
        counts = [item for item in counts if item.post_count > 0]
        return sorted(counts, key=lambda item: item.post_count, reverse=True)

    def generate_category_paths(self):
        index = self.build_index()
        return [
            {
                "params": {"category": category.url_slug},
                "props": {"posts": index.category_posts(category.id), "category_id": category.id},
            }
            for category in self.store.get_collection("categories")
        ]

    def get_top_categories(self, limit=4):
        """页脚展示用，排除 uncategorized"""
        categories = [
            item for item in self.get_categories_with_post_counts()
            if item.entry.slug != 'uncategorized' and item.entry.name.lower() != 'uncategorized'
        ]
        return categories[:limit]

    # ---------- 标签 ----------

    def get_posts_by_tag(self, tag_id):
        return [post for post in self.get_all_posts() if tag_id in post.tag_ids()]

    def get_tags_with_post_counts(self, index=None) -> list[TaxonomyCount]:
        """全部标签及文章数（包括 0），按数量倒序"""
        index = index or self.build_index()
        counts = [
            TaxonomyCount(tag, len(index.tag_posts(tag.id)))
            for tag in self.store.get_collection("tags")
        ]
        return sorted(counts, key=lambda item: item.post_count, reverse=True)

    def generate_tag_paths(self):
        index = self.build_index()
        return [
            {
                "params": {"tag": tag.url_slug},
                "props": {"posts": index.tag_posts(tag.id), "tag_id": tag.id},
            }
            for tag in self.store.get_collection("tags")
        ]

    # ---------- 作者 ----------

    def get_posts_by_author(self, author_id):
        return [post for post in self.get_all_posts() if post.author.id == author_id]

    def get_posts_by_author_slug(self, author_slug):
        author = next(
            (author for author in self.store.get_collection("authors") if author.slug == author_slug), None
        )
        if author is None:
            return []
        return self.get_posts_by_author(author.id)

    def get_authors_with_post_counts(self, index=None) -> list[TaxonomyCount]:
        index = index or self.build_index()
        counts = [
            TaxonomyCount(author, len(index.author_posts(author.id)))
            for author in self.store.get_collection("authors")
        ]
        return sorted(counts, key=lambda item: item.post_count, reverse=True)

    def generate_author_paths(self):
        return [
            {"params": {"slug": author.slug}, "props": {"author": author}}
            for author in self.store.get_collection("authors")
        ]

    @staticmethod
    def _unique_tag_ids(posts):
        return list(dict.fromkeys(tag_id for post in posts for tag_id in post.tag_ids()))

    def get_author_tags(self, author_id):
        """作者文章中出现过的标签 id，去重并保持首次出现顺序"""
        return self._unique_tag_ids(self.get_posts_by_author(author_id))

    def get_author_tags_by_slug(self, author_slug):
        return self._unique_tag_ids(self.get_posts_by_author_slug(author_slug))
