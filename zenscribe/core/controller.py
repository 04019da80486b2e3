"""
Application controller for ZenScribe.

Owns everything the front-end renders: the session, the generation status,
the article history and the currently displayed article. Every change to
history, user or destination config is written to storage before the
method returns.

Usage:
    controller = AppController(StoreAdapter(FileStorage(".zenscribe")),
                               ArticleGenerator(llm), confirm=ask_yes_no)
    controller.login(User(name="Aki", email="a@x.com"))
    article = asyncio.run(controller.request_generation(config))
"""
import asyncio
import time
import uuid
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from zenscribe.core.history import ArticleHistory
from zenscribe.core.logger import log_event
from zenscribe.core.session import SessionGate
from zenscribe.core.storage import DESTINATION_KEY, StoreAdapter
from zenscribe.exceptions import PreconditionNotMet, PublishFailed
from zenscribe.models.article import Article, ArticleConfig
from zenscribe.models.destination import DestinationConfig
from zenscribe.models.user import User
from zenscribe.utils.file_handler import save_draft

GENERATION_ERROR_MESSAGE = "Failed to generate the article. Please wait a moment and try again."
DELETE_CONFIRMATION = "Delete this article from the history?"
LOGOUT_CONFIRMATION = "Log out?"


class SessionState(str, Enum):
    NO_USER = "no_user"
    HAS_USER = "has_user"


class GenerationState(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    FAILED = "failed"
    SUCCEEDED = "succeeded"


def _now_ms() -> int:
    return int(time.time() * 1000)


class AppController:
    def __init__(
        self,
        store: StoreAdapter,
        generator,
        confirm: Callable[[str], bool],
        publisher=None,
        on_display: Optional[Callable[[Article], None]] = None,
        new_id: Callable[[], str] = lambda: str(uuid.uuid4()),
        clock_ms: Callable[[], int] = _now_ms,
    ):
        self.store = store
        self.generator = generator
        self.confirm = confirm
        self.publisher = publisher
        self.on_display = on_display
        self._new_id = new_id
        self._clock_ms = clock_ms

        self.history = ArticleHistory(store)
        self.session = SessionGate(store)
        self.destination_config: DestinationConfig = (
            store.load(DESTINATION_KEY, DestinationConfig) or DestinationConfig()
        )

        self.generation_state = GenerationState.IDLE
        self.generation_error: Optional[str] = None
        self.publish_error: Optional[str] = None
        self.selected_id: Optional[str] = None
        self.auth_prompt_open = not self.session.is_logged_in

        log_event("INFO", "Application state loaded", {
            "articles": len(self.history),
            "logged_in": self.session.is_logged_in,
            "destination_configured": self.destination_config.is_configured,
        })

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def session_state(self) -> SessionState:
        return SessionState.HAS_USER if self.session.is_logged_in else SessionState.NO_USER

    @property
    def current_user(self) -> Optional[User]:
        return self.session.current_user()

    @property
    def current_article(self) -> Optional[Article]:
        if self.selected_id is None:
            return None
        return self.history.get(self.selected_id)

    @property
    def is_generating(self) -> bool:
        return self.generation_state == GenerationState.IN_FLIGHT

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def request_generation(self, config: ArticleConfig) -> Optional[Article]:
        """
        Generate an article and make it the current selection.

        Returns None when the request is rejected (logged out, or another
        generation still running) or when generation fails.
        """
        if self.is_generating:
            log_event("WARNING", "Generation already in progress, request ignored", {"topic": config.topic})
            return None

        try:
            self.session.require_user()
        except PreconditionNotMet:
            self.auth_prompt_open = True
            log_event("INFO", "Generation requires login, opening login prompt")
            return None

        self.generation_state = GenerationState.IN_FLIGHT
        self.generation_error = None
        log_event("INFO", "Generating article", {"topic": config.topic})
        try:
            generated = await self.generator.generate(config)
        except asyncio.CancelledError:
            self.generation_state = GenerationState.IDLE
            log_event("WARNING", "Article generation cancelled", {"topic": config.topic})
            raise
        except Exception as err:
            self.generation_state = GenerationState.FAILED
            self.generation_error = GENERATION_ERROR_MESSAGE
            log_event("ERROR", f"Article generation failed: {err}", {"error_type": type(err).__name__})
            return None

        article = Article.create(
            generated,
            config,
            article_id=self._new_id(),
            created_at=self._clock_ms()
        )
        self.history.append(article)
        self.selected_id = article.id
        self.generation_state = GenerationState.SUCCEEDED
        log_event("SUCCESS", "Article generated", {"id": article.id, "title": article.title})

        if self.on_display is not None:
            self.on_display(article)
        return article

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def select_article(self, article_id: str) -> bool:
        if self.history.get(article_id) is None:
            return False
        self.selected_id = article_id
        return True

    def clear_selection(self) -> None:
        self.selected_id = None

    def delete_article(self, article_id: str) -> bool:
        if not self.confirm(DELETE_CONFIRMATION):
            return False

        removed = self.history.remove(article_id)
        if self.selected_id == article_id:
            self.selected_id = None
        log_event("INFO", "Article deleted", {"id": article_id, "found": removed is not None})
        return removed is not None

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def open_login_prompt(self) -> None:
        self.auth_prompt_open = True

    def close_login_prompt(self) -> bool:
        """Dismiss the prompt; it stays open while nobody is logged in."""
        if not self.session.is_logged_in:
            return False
        self.auth_prompt_open = False
        return True

    def login(self, user: User) -> None:
        self.session.login(user)
        self.auth_prompt_open = False

    def logout(self) -> bool:
        if not self.confirm(LOGOUT_CONFIRMATION):
            return False
        self.session.logout()
        self.auth_prompt_open = True
        return True

    # ------------------------------------------------------------------
    # Destination
    # ------------------------------------------------------------------

    def update_destination_config(self, config: DestinationConfig) -> None:
        self.destination_config = config
        self.store.save(DESTINATION_KEY, config)
        log_event("INFO", "Destination settings saved", {"configured": config.is_configured})

    def publish_article(self, article_id: str) -> Optional[dict]:
        """Send a history article to WordPress as a draft. Errors land in ``publish_error``."""
        article = self.history.get(article_id)
        if article is None:
            self.publish_error = f"Article not found: {article_id}"
            return None
        if self.publisher is None:
            self.publish_error = "Publishing is not available"
            return None

        try:
            post = self.publisher.publish(article, self.destination_config)
        except PublishFailed as err:
            self.publish_error = str(err)
            log_event("ERROR", f"Publishing failed: {err}", {"id": article_id})
            return None

        self.publish_error = None
        return post

    def export_draft(self, article_id: str, directory="data/drafts") -> Optional[Path]:
        article = self.history.get(article_id)
        if article is None:
            return None
        try:
            path = save_draft(article.title, article.content, directory, draft_id=article.id)
        except OSError as err:
            log_event("ERROR", f"Draft export failed: {err}", {"id": article_id})
            return None
        log_event("INFO", "Draft saved", {"path": str(path)})
        return path
