from marketplace.content.api import ContentApi, build_content_api
from marketplace.content.models import Content, ContentStatus, ContentType, Price, Seeder, SubmitObject, Synopsis

__all__ = [
    "Content",
    "ContentApi",
    "ContentStatus",
    "ContentType",
    "Price",
    "Seeder",
    "SubmitObject",
    "Synopsis",
    "build_content_api",
]
