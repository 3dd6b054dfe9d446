# FastAPI 应用程序的主要入口点：仪表盘 JSON API、RSS 与 robots.txt
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog_backend.api import affiliates, authors, categories, feeds, pages, posts, tags
from blog_backend.api.common import CORS_HEADERS, ApiError
from blog_backend.utils.logger import setup_logger

app = FastAPI(title="Blog Content Center")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-API-Key", "X-Requested-With"],
    max_age=86400,
)

# 注册路由
for module in (posts, categories, tags, authors, pages, affiliates):
    app.include_router(module.router, prefix="/api")
app.include_router(feeds.router)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=CORS_HEADERS)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logging.warning(f"查询参数无效: {request.url.path}")
    error = ApiError(400, 'Invalid query parameters', 'INVALID_QUERY', details=str(exc.errors()))
    return JSONResponse(status_code=400, content=error.to_dict(), headers=CORS_HEADERS)


# 启动初始化
@app.on_event("startup")
async def startup_event():
    setup_logger()
    logging.info("Server started.")


@app.on_event("shutdown")
async def shutdown_event():
    logging.info("Server shutting down.")


if __name__ == "__main__":
    uvicorn.run("blog_backend.main:app", host="0.0.0.0", port=8000)
