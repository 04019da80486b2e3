from typing import List, Optional, Tuple

from zenscribe.core.logger import log_event
from zenscribe.core.storage import HISTORY_KEY, StoreAdapter
from zenscribe.models.article import Article


class ArticleHistory:
    """
    Newest-first list of generated articles, written back to storage after
    every change. Ids are assumed unique; the controller is the only producer.
    """

    def __init__(self, store: StoreAdapter):
        self.store = store
        self._articles: List[Article] = list(store.load(HISTORY_KEY, List[Article]) or [])

    def all(self) -> Tuple[Article, ...]:
        return tuple(self._articles)

    def get(self, article_id: str) -> Optional[Article]:
        for article in self._articles:
            if article.id == article_id:
                return article
        return None

    def append(self, article: Article) -> None:
        self._articles.insert(0, article)
        self._persist()

    def remove(self, article_id: str) -> Optional[Article]:
        """Drop the first article with ``article_id``; the caller owns selection."""
        removed = None
        for index, article in enumerate(self._articles):
            if article.id == article_id:
                removed = self._articles.pop(index)
                break
        self._persist()
        return removed

    def _persist(self) -> None:
        if not self.store.save(HISTORY_KEY, self._articles):
            log_event("WARNING", "Article history kept in memory only", {"count": len(self._articles)})

    def __len__(self) -> int:
        return len(self._articles)
