# zenscribe/models/article.py
import time
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ArticleConfig(BaseModel):
    """What the user asked for: topic, keywords and tone. Empty strings are allowed."""
    model_config = ConfigDict(frozen=True)

    topic: str
    keywords: str
    tone: str


class GeneratedText(BaseModel):
    title: str
    content: str


class Article(BaseModel):
    """A generated article plus the configuration that produced it.

    Serialized with the camelCase names used in storage (``createdAt``);
    ``created_at`` is milliseconds since the epoch.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    content: str
    config: ArticleConfig
    created_at: int = Field(alias="createdAt")

    @classmethod
    def create(
        cls,
        generated: GeneratedText,
        config: ArticleConfig,
        article_id: Optional[str] = None,
        created_at: Optional[int] = None,
    ) -> "Article":
        return cls(
            id=article_id or str(uuid.uuid4()),
            title=generated.title,
            content=generated.content,
            config=config.model_copy(),
            created_at=created_at if created_at is not None else int(time.time() * 1000),
        )
