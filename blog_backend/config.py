# 服务器配置
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    CONTENT_DIR: str = "content"
    # 仪表盘 API 的密钥，未设置时所有 API 请求都会被拒绝
    BLOG_API_KEY: str = ""
    # 开发模式下显示草稿
    SHOW_DRAFTS: bool = False
    # 部署后的站点地址，robots.txt 使用；为空时取请求地址
    SITE_URL: str = ""
    ENABLE_LOGGING: bool = True
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"


config = Config()


def get_config() -> Config:
    return config
