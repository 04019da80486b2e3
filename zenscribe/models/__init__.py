from zenscribe.models.article import Article, ArticleConfig, GeneratedText
from zenscribe.models.destination import DestinationConfig
from zenscribe.models.user import User

__all__ = ["Article", "ArticleConfig", "DestinationConfig", "GeneratedText", "User"]
