# 草稿与页面发布状态过滤


def filter_drafts(post, show_drafts=False):
    """开发模式显示全部文章，生产模式只显示已发布文章"""
    return True if show_drafts else post.status == "published"


def filter_published_only(post):
    return post.status == "published"


def filter_drafts_only(post):
    return post.status == "draft"


def filter_published_pages(page):
    return page.published is True
