# 各集合共用的基础模型
from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class ContentModel(BaseModel):
    """内容记录基类：JSON 使用驼峰字段名，Python 侧使用下划线字段名"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Reference(BaseModel):
    """指向其他集合条目的引用，读入时统一成 {id} 形式"""
    id: str
    collection: str | None = None

    @model_validator(mode="before")
    @classmethod
    def from_raw(cls, value):
        if isinstance(value, str):
            return {"id": value}
        return value

    def __str__(self):
        return self.id


class SEOOverride(ContentModel):
    """条目级别的自定义 SEO 信息，优先于自动生成的内容"""
    title: str | None = None
    description: str | None = None
    keywords: list[str] = []
    og_image: str | None = None
    og_image_alt: str | None = None


def coerce_date(value):
    # YAML 会把 2024-01-15 解析成 date，JSON 里是字符串
    if isinstance(value, str) and len(value) == 10:
        value = date.fromisoformat(value)
    if isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    return value
