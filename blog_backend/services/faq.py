"""
FAQ 解析与 FAQPage 结构化数据
============================

支持的正文格式：

    ## Frequently Asked Questions (FAQ)
    ### Q1: 问题？
    A1: 回答……

FAQ 区块从标题中含 "FAQ" 或 "Frequently Asked Questions" 的标题行开始，
到下一个级别不低于该标题的标题行结束（### 问题行属于区块内部）。
因此 FAQ 标题本身是三级标题（### FAQ）时，第一个 ### Q1 行就会结束区块，
解析结果为 None；FAQ 标题应使用一级或二级标题。
"""

import logging
import re

from blog_backend.models.seo import FAQData, FAQItem

_FAQ_HEADER = re.compile(r'^(#{1,6})\s*.*(?:FAQ|Frequently Asked Questions).*$', re.IGNORECASE | re.MULTILINE)
_HEADING = re.compile(r'^(#{1,6})\s', re.MULTILINE)
_QA_PAIR = re.compile(
    r'###\s*Q\d*:?\s*(.+?)\n+A\d*:?\s*(.+?)(?=\n###|\n\n(?!A\d*:)|\Z)',
    re.IGNORECASE | re.DOTALL,
)
_MARKDOWN_LINK = re.compile(r'\[([^\]]+)\]\([^)]+\)')


def _clean_text(text):
    text = re.sub(r'\s+', ' ', text)
    text = re.sub(r'^\s*:\s*', '', text)
    return _MARKDOWN_LINK.sub(r'\1', text.strip())


def parse_faq_from_content(content):
    """解析正文中的第一个 FAQ 区块，没有 FAQ 或没有问答对时返回 None"""
    if not content or not isinstance(content, str):
        return None

    header = _FAQ_HEADER.search(content)
    if not header:
        return None

    title = re.sub(r'^#{1,6}\s*', '', header.group(0))
    title = re.sub(r'\(FAQ\)', '', title, flags=re.IGNORECASE).strip()

    level = len(header.group(1))
    section = content[header.end():]
    for heading in _HEADING.finditer(section):
        if len(heading.group(1)) <= level:
            section = section[:heading.start()]
            break

    items = []
    for match in _QA_PAIR.finditer(section):
        question = _clean_text(match.group(1))
        answer = _clean_text(match.group(2))
        if question and answer:
            items.append(FAQItem(question=question, answer=answer))

    if not items:
        return None
    return FAQData(title=title, items=items)


def validate_faq_data(faq_data):
    """至少一个问答对，且问题和回答都非空"""
    if not faq_data or not faq_data.items:
        return False
    return all(item.question.strip() and item.answer.strip() for item in faq_data.items)


def generate_faq_schema_items(faq_data):
    """只返回 Question 列表，供嵌入其他结构化数据使用"""
    if not faq_data or not faq_data.items:
        return None
    items = [
        {
            "@type": "Question",
            "name": item.question,
            "acceptedAnswer": {"@type": "Answer", "text": item.answer},
        }
        for item in faq_data.items
        if item.question and item.answer
    ]
    return items or None


def generate_faq_schema(faq_data):
    items = generate_faq_schema_items(faq_data)
    if not items:
        logging.debug("FAQ 数据为空，不生成 FAQPage")
        return None
    return {
        "@context": "https://schema.org",
        "@type": "FAQPage",
        "mainEntity": items,
    }
