# 分页计算：页面分页数据与 API 分页信息
import math

from blog_backend.models.seo import PaginatedData, PaginationUrls


def create_pagination_data(items, current_page, page_size=5, base_path="/blog") -> PaginatedData:
    """
    计算某一页的数据切片与前后页链接。
    第 1 页的链接不带页码后缀；第 2 页的上一页指向 base_path；
    没有数据时 last_page 为 0，且没有上一页/下一页。
    """
    if page_size < 0:
        raise ValueError(f"page_size 不能为负数: {page_size}")
    total = len(items)
    last_page = math.ceil(total / page_size) if page_size else 0
    start = (current_page - 1) * page_size
    end = min(start + page_size - 1, total - 1)
    data = list(items[start:start + page_size]) if start >= 0 and page_size else []

    if current_page <= 1:
        prev_url = None
    elif current_page == 2:
        prev_url = base_path
    else:
        prev_url = f"{base_path}/{current_page - 1}"
    next_url = f"{base_path}/{current_page + 1}" if current_page < last_page else None

    return PaginatedData(
        data=data,
        start=start,
        end=end,
        total=total,
        current_page=current_page,
        size=page_size,
        last_page=last_page,
        url=PaginationUrls(
            current=base_path if current_page == 1 else f"{base_path}/{current_page}",
            prev=prev_url,
            next=next_url,
            first=base_path,
            last=f"{base_path}/{last_page}" if last_page > 1 else base_path,
        ),
    )


def paginate_slice(items, page, per_page):
    """API 用分页：返回当前页的数据与 {page, perPage, total, totalPages, hasNext, hasPrev}"""
    total = len(items)
    start = (page - 1) * per_page
    end = start + per_page
    pagination = {
        "page": page,
        "perPage": per_page,
        "total": total,
        "totalPages": math.ceil(total / per_page),
        "hasNext": end < total,
        "hasPrev": page > 1,
    }
    return items[start:end], pagination
