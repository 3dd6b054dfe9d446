# 面包屑导航生成
import logging
from urllib.parse import unquote

from blog_backend.models.seo import BreadcrumbItem

BREADCRUMB_CONFIG = {
    "home_label": "Home",
    "blog_label": "Blog",
    "categories_label": "Categories",
    "tags_label": "Tags",
    "authors_label": "Authors",
}


def safe_decode_uri_component(value):
    """解码失败时原样返回"""
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        logging.warning(f"URI 解码失败: {value}")
        return value


def _add(breadcrumbs, name, url=None, current=False):
    breadcrumbs.append(BreadcrumbItem(name=name, url=url, position=len(breadcrumbs) + 1, is_current_page=current))


def _mark_last_current(breadcrumbs):
    last = breadcrumbs[-1]
    breadcrumbs[-1] = last.model_copy(update={"url": None, "is_current_page": True})


def generate_breadcrumbs(pathname, page_data=None):
    """
    根据路径生成面包屑。首页返回空列表，其他页面以 Home 开头。
    page_data 可包含 title / category / tags / author（模型对象），用于显示名称。
    """
    page_data = page_data or {}
    segments = [segment for segment in pathname.split('/') if segment]
    if not segments:
        return []

    breadcrumbs = []
    _add(breadcrumbs, BREADCRUMB_CONFIG["home_label"], '/')
    section = segments[0]

    if section == 'blog':
        _add(breadcrumbs, BREADCRUMB_CONFIG["blog_label"], '/blog')
        if len(segments) == 1:
            _mark_last_current(breadcrumbs)
        else:
            category = page_data.get("category")
            if category:
                _add(breadcrumbs, category.name, f"/categories/{category.slug or category.id}")
            if page_data.get("title"):
                _add(breadcrumbs, page_data["title"], current=True)

    elif section in ('categories', 'tags'):
        label_key = "categories_label" if section == 'categories' else "tags_label"
        _add(breadcrumbs, BREADCRUMB_CONFIG["blog_label"], '/blog')
        _add(breadcrumbs, BREADCRUMB_CONFIG[label_key], f"/{section}")
        if len(segments) == 1:
            _mark_last_current(breadcrumbs)
        else:
            if section == 'categories':
                entry = page_data.get("category")
            else:
                tags = page_data.get("tags") or []
                entry = tags[0] if tags else None
            name = entry.name if entry else safe_decode_uri_component(segments[1])
            _add(breadcrumbs, name, current=True)

    elif section == 'authors':
        _add(breadcrumbs, BREADCRUMB_CONFIG["authors_label"], '/authors')
        if len(segments) == 1:
            _mark_last_current(breadcrumbs)
        else:
            author = page_data.get("author")
            _add(breadcrumbs, author.name if author else safe_decode_uri_component(segments[1]), current=True)

    elif section == 'legal':
        if len(segments) > 1:
            _add(breadcrumbs, page_data.get("title") or safe_decode_uri_component(segments[1]), current=True)

    else:
        _add(breadcrumbs, page_data.get("title") or safe_decode_uri_component(segments[-1]), current=True)

    return breadcrumbs


def get_blog_post_breadcrumbs(post, category=None):
    """文章页：Home > Blog > 分类 > 标题；未传入分类对象时用分类 id 显示"""
    breadcrumbs = []
    _add(breadcrumbs, BREADCRUMB_CONFIG["home_label"], '/')
    _add(breadcrumbs, BREADCRUMB_CONFIG["blog_label"], '/blog')
    if category is not None:
        _add(breadcrumbs, category.name, f"/categories/{category.url_slug}")
    else:
        _add(breadcrumbs, post.category.id, f"/categories/{post.category.id}")
    _add(breadcrumbs, post.title, current=True)
    return breadcrumbs


def get_category_breadcrumbs(category_id, category=None):
    if not category_id:
        logging.warning("生成分类面包屑时缺少分类 id")
        return []
    breadcrumbs = []
    _add(breadcrumbs, BREADCRUMB_CONFIG["home_label"], '/')
    _add(breadcrumbs, BREADCRUMB_CONFIG["blog_label"], '/blog')
    _add(breadcrumbs, BREADCRUMB_CONFIG["categories_label"], '/categories')
    _add(breadcrumbs, category.name if category else category_id, current=True)
    return breadcrumbs


def get_tag_breadcrumbs(tag_slug, tag=None):
    if not tag_slug:
        logging.warning("生成标签面包屑时缺少标签 slug")
        return []
    breadcrumbs = []
    _add(breadcrumbs, BREADCRUMB_CONFIG["home_label"], '/')
    _add(breadcrumbs, BREADCRUMB_CONFIG["blog_label"], '/blog')
    _add(breadcrumbs, BREADCRUMB_CONFIG["tags_label"], '/tags')
    _add(breadcrumbs, tag.name if tag else tag_slug, current=True)
    return breadcrumbs


def get_author_breadcrumbs(author_id, author=None):
    if not author_id:
        logging.warning("生成作者面包屑时缺少作者 id")
        return []
    breadcrumbs = []
    _add(breadcrumbs, BREADCRUMB_CONFIG["home_label"], '/')
    _add(breadcrumbs, BREADCRUMB_CONFIG["authors_label"], '/authors')
    _add(breadcrumbs, author.name if author else author_id, current=True)
    return breadcrumbs


def validate_breadcrumbs(items):
    """
    过滤掉名称为空或 url 类型不对的条目，并重新编号 position。
    items 可以是 BreadcrumbItem 或字典（例如模板传入的数据）。
    """
    valid = []
    for item in items:
        raw = item.model_dump() if isinstance(item, BreadcrumbItem) else dict(item)
        name = raw.get("name")
        if not isinstance(name, str) or not name.strip():
            logging.warning(f"面包屑条目名称无效，已跳过: {raw}")
            continue
        url = raw.get("url")
        if url is not None and not isinstance(url, str):
            logging.warning(f"面包屑条目 url 无效，已跳过: {raw}")
            continue
        valid.append(BreadcrumbItem(
            name=name,
            url=url,
            position=len(valid) + 1,
            is_current_page=bool(raw.get("is_current_page", False)),
        ))
    return valid
