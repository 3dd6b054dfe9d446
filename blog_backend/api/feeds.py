# RSS 订阅源与 robots.txt，不需要 API 密钥
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response

from blog_backend.api.common import get_blog
from blog_backend.config import Config, get_config
from blog_backend.services.blog_logic import BlogService
from blog_backend.services.feeds import generate_robots_txt, generate_rss_feed

router = APIRouter()


@router.get("/rss.xml")
def rss_feed(blog: BlogService = Depends(get_blog)):
    try:
        rss = generate_rss_feed(blog)
    except Exception as e:
        logging.error(f"RSS 生成失败: {str(e)}")
        return PlainTextResponse('Error generating RSS feed', status_code=500)
    if rss is None:
        return PlainTextResponse('RSS feed is disabled', status_code=404)
    return Response(content=rss, media_type="application/rss+xml")


@router.get("/robots.txt")
def robots_txt(request: Request, cfg: Config = Depends(get_config)):
    base_url = cfg.SITE_URL or str(request.base_url)
    return Response(content=generate_robots_txt(base_url), media_type="text/plain; charset=utf-8")
