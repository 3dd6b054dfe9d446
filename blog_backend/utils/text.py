# 文本与日期相关的小工具
import math
import re
from datetime import datetime, timezone
from urllib.parse import quote

WORDS_PER_MINUTE = 200

_HTML_TAG = re.compile(r'<[^>]*>')
_MARKDOWN_CHARS = re.compile(r'[#*`_~]')
_NEWLINES = re.compile(r'\n+')


def count_words(content):
    """按空白切分统计词数"""
    return len((content or "").split())


def calculate_reading_time(content):
    """按每分钟 200 词估算阅读时间，向上取整，至少 1 分钟"""
    return max(1, math.ceil(count_words(content) / WORDS_PER_MINUTE))


def generate_excerpt(content, max_length=160):
    """去掉 HTML 标签与 Markdown 标记后截取摘要，在最后一个空格处截断"""
    plain = _HTML_TAG.sub('', content or '')
    plain = _MARKDOWN_CHARS.sub('', plain)
    plain = _NEWLINES.sub(' ', plain).strip()
    if len(plain) <= max_length:
        return plain
    truncated = plain[:max_length]
    last_space = truncated.rfind(' ')
    if last_space > 0:
        truncated = truncated[:last_space]
    return truncated + '...'


def format_date(value: datetime) -> str:
    """格式化为 "January 15, 2024" """
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def encode_uri_component(value):
    return quote(value, safe="-_.!~*'()")


def generate_share_url(title, author, site_name):
    """生成分享文案（已做 URL 编码）"""
    return encode_uri_component(f'"{title}" - by {author} | {site_name}')


def get_current_url(site_url, pathname):
    return f"{site_url}{pathname}"


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso_string(value: datetime) -> str:
    """与浏览器 Date.toISOString 相同的格式：2024-01-15T00:00:00.000Z"""
    value = ensure_utc(value)
    return value.strftime('%Y-%m-%dT%H:%M:%S.') + f"{value.microsecond // 1000:03d}Z"


def timestamp_ms(value: datetime | None = None) -> int:
    value = value or datetime.now(timezone.utc)
    return int(ensure_utc(value).timestamp() * 1000)
