# 仪表盘 API 的公共部分：鉴权、CORS、统一返回格式、错误处理
import hmac
import logging
import math
import re
from contextlib import contextmanager

from fastapi import Depends, Header
from fastapi.responses import JSONResponse, Response

from blog_backend.config import Config, get_config
from blog_backend.services.blog_logic import BlogService
from blog_backend.services.content_store import ContentStore
from blog_backend.services.pagination import paginate_slice
from blog_backend.utils.text import timestamp_ms

CORS_HEADERS = {
    'Content-Type': 'application/json',
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET, POST, PUT, DELETE, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type, Authorization, X-API-Key, X-Requested-With',
    'Access-Control-Max-Age': '86400',
}

_LEADING_NUMBER = re.compile(r'^\s*([-+]?(?:\d+\.?\d*|\.\d+))')


class ApiError(Exception):
    """API 错误，由 main.py 中的异常处理器转换成 {success: false, error, code?, details?}"""

    def __init__(self, status_code, error, code=None, details=None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.code = code
        self.details = details

    def to_dict(self):
        body = {"success": False, "error": self.error}
        if self.code:
            body["code"] = self.code
        if self.details is not None:
            body["details"] = self.details
        return body


def get_store(cfg: Config = Depends(get_config)) -> ContentStore:
    return ContentStore(cfg.CONTENT_DIR)


def get_blog(store: ContentStore = Depends(get_store), cfg: Config = Depends(get_config)) -> BlogService:
    return BlogService(store, show_drafts=cfg.SHOW_DRAFTS)


def require_api_key(
    authorization: str | None = Header(default=None),
    x_api_key: str | None = Header(default=None),
    cfg: Config = Depends(get_config),
):
    """Authorization: Bearer <key> 或 X-API-Key；未配置密钥时拒绝所有请求"""
    provided = (authorization.replace('Bearer ', '', 1) if authorization else '') or x_api_key
    if not provided:
        raise ApiError(401, 'Missing API key.', 'UNAUTHORIZED')
    if not cfg.BLOG_API_KEY or not hmac.compare_digest(provided.encode(), cfg.BLOG_API_KEY.encode()):
        logging.warning("API 请求携带了无效的密钥")
        raise ApiError(401, 'Invalid API key.', 'UNAUTHORIZED')


@contextmanager
def fetch_errors(message):
    """把未预期的异常转换成 500 + details，ApiError 原样抛出"""
    try:
        yield
    except ApiError:
        raise
    except Exception as e:
        logging.error(f"{message}: {str(e)}")
        raise ApiError(500, message, details=str(e)) from e


def preflight_response():
    return Response(status_code=200, headers=CORS_HEADERS)


def api_response(items, page, per_page, filters, **extra):
    """分页并包装成 {success, data, pagination, filters, ..., timestamp}"""
    page_items, pagination = paginate_slice(items, page, per_page)
    content = {"success": True, "data": page_items, "pagination": pagination, "filters": filters}
    content.update(extra)
    content["timestamp"] = timestamp_ms()
    return JSONResponse(content=content, headers=CORS_HEADERS)


def sort_items(items, sort_by, sort_order, keys, default):
    """按 keys[sort_by] 排序，未知字段使用 default；sort_order 为 desc 时倒序，相等元素保持原顺序"""
    key = keys.get(sort_by, keys[default])
    return sorted(items, key=key, reverse=sort_order == 'desc')


def text_key(field):
    return lambda item: (item.get(field) or '').lower()


def bool_param(value):
    """查询参数 'true' 为真，其他任何值为假"""
    return value == 'true'


def parse_price(value):
    """去掉 $ 后解析开头的数字，例如 "$129.99" -> 129.99，无法解析时返回 None"""
    if not value:
        return None
    match = _LEADING_NUMBER.match(value.replace('$', '', 1))
    return float(match.group(1)) if match else None


def discount_percent(price, original_price):
    current, original = parse_price(price), parse_price(original_price)
    if current is None or original is None or original == 0:
        return None
    return int(math.floor((original - current) / original * 100 + 0.5))


def most_common(counter: dict):
    """出现次数最多的键；并列时取后出现的那个"""
    best = None
    for key, count in counter.items():
        if best is None or not counter[best] > count:
            best = key
    return best


def top_counts(counter: dict, limit):
    return sorted(counter.items(), key=lambda item: item[1], reverse=True)[:limit]
