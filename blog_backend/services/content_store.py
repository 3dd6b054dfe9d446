"""
内容存储：从磁盘读取 JSON / Markdown 内容集合
==========================================

目录结构（相对 CONTENT_DIR）：
- blog/**/*.md          博客文章（front matter + 正文），id 为去掉扩展名的相对路径
- legal/**/*.md         法律页面
- data/authors.json     作者；categories.json / tags.json / settings.json / pages.json 同理
- data/affiliate-categories.json / data/affiliate-comparisons.json
- data/products/**/*.json  联盟商品，每个文件为单个对象或对象列表

JSON 数据文件可以是对象列表（每项带 id），也可以是以 id 为键的对象。
每次调用都重新读取文件，不做缓存。
"""

import json
import logging
from pathlib import Path

import frontmatter
from pydantic import ValidationError

from blog_backend.models.affiliate import AffiliateCategory, AffiliateComparison, AffiliateProduct
from blog_backend.models.post import Post
from blog_backend.models.site import LegalPage, Page, SiteSettings
from blog_backend.models.taxonomy import Author, Category, Tag

MARKDOWN_SUFFIXES = ('.md', '.mdx')

# 集合名 -> (读取方式, 相对路径, 模型)
COLLECTIONS = {
    "blog": ("markdown", "blog", Post),
    "legal": ("markdown", "legal", LegalPage),
    "authors": ("json", "data/authors.json", Author),
    "categories": ("json", "data/categories.json", Category),
    "tags": ("json", "data/tags.json", Tag),
    "settings": ("json", "data/settings.json", SiteSettings),
    "pages": ("json", "data/pages.json", Page),
    "affiliateCategories": ("json", "data/affiliate-categories.json", AffiliateCategory),
    "affiliateComparisons": ("json", "data/affiliate-comparisons.json", AffiliateComparison),
    "affiliateProducts": ("json_glob", "data/products", AffiliateProduct),
}


class ContentStore:
    """内容集合读取器"""

    def __init__(self, content_dir):
        self.content_dir = Path(content_dir)

    def get_collection(self, name, predicate=None):
        """读取并校验整个集合，可选过滤函数；校验失败的条目跳过并记录警告"""
        kind, location, model = COLLECTIONS[name]
        path = self.content_dir / location
        if kind == "markdown":
            raw_entries = self._read_markdown_dir(path)
        elif kind == "json":
            raw_entries = self._read_json_file(path)
        else:
            raw_entries = self._read_json_dir(path)

        entries = []
        for raw in raw_entries:
            if not isinstance(raw, dict):
                logging.warning(f"集合 {name} 中存在非对象条目，已跳过: {raw!r}")
                continue
            try:
                entry = model.model_validate(raw)
            except ValidationError as e:
                logging.warning(f"集合 {name} 中的条目 {raw.get('id')} 校验失败，已跳过: {e.error_count()} 个错误")
                continue
            if predicate is None or predicate(entry):
                entries.append(entry)
        return entries

    def get_entry(self, name, entry_id):
        """按 id 查找单个条目，找不到返回 None"""
        for entry in self.get_collection(name):
            if entry.id == entry_id:
                return entry
        return None

    def _read_markdown_dir(self, directory):
        if not directory.is_dir():
            logging.info(f"内容目录不存在: {directory}")
            return []
        raw_entries = []
        for path in sorted(directory.rglob('*')):
            if path.suffix not in MARKDOWN_SUFFIXES or not path.is_file():
                continue
            document = frontmatter.load(path)
            entry_id = path.relative_to(directory).with_suffix('').as_posix()
            raw_entries.append({**document.metadata, "id": entry_id, "body": document.content})
        return raw_entries

    def _read_json_file(self, path):
        if not path.is_file():
            logging.info(f"数据文件不存在: {path}")
            return []
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get("id"), str):
            return [data]
        if isinstance(data, dict):
            # 以 id 为键的对象
            return [{**value, "id": key} if isinstance(value, dict) else value for key, value in data.items()]
        raise ValueError(f"无法识别的数据文件格式: {path}")

    def _read_json_dir(self, directory):
        if not directory.is_dir():
            logging.info(f"数据目录不存在: {directory}")
            return []
        raw_entries = []
        for path in sorted(directory.rglob('*.json')):
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if isinstance(data, list):
                raw_entries.extend(data)
            else:
                raw_entries.append(data)
        return raw_entries
