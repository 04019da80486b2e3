import base64
import html

import requests

from zenscribe.core.logger import log_event
from zenscribe.exceptions import PublishFailed
from zenscribe.models.article import Article
from zenscribe.models.destination import DestinationConfig
from zenscribe.utils.text_cleaner import clean_article_text


class WordPressClient:
    def __init__(self, base_url: str, username: str, app_password: str, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Ensure no spaces in the password
        app_password = app_password.replace(" ", "")
        token = base64.b64encode(f"{username}:{app_password}".encode()).decode()
        self.headers = {
            "Authorization": f"Basic {token}",
            "Content-Type": "application/json",
            "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"
        }

    def create_post(self, title: str, content: str, excerpt: str = "", status: str = "draft") -> dict:
        url = f"{self.base_url}/wp-json/wp/v2/posts"
        payload = {
            "title": title,
            "content": content,
            "status": status
        }
        if excerpt:
            payload["excerpt"] = excerpt
        try:
            response = requests.post(url, headers=self.headers, json=payload, timeout=self.timeout)
        except requests.RequestException as err:
            raise PublishFailed(f"Failed to reach {url}: {err}") from err
        if response.status_code != 201:
            raise PublishFailed(f"Failed to create post: {response.status_code} - {response.text}")
        try:
            return response.json()
        except ValueError as err:
            raise PublishFailed(f"Post created but the response was not JSON: {response.text[:200]}") from err


def to_block_content(text: str) -> str:
    """Turn plain article text into WordPress paragraph blocks."""
    paragraphs = [p.strip() for p in clean_article_text(text).split("\n\n") if p.strip()]
    blocks = []
    for paragraph in paragraphs:
        body = "<br/>".join(html.escape(line) for line in paragraph.splitlines())
        blocks.append(f"<!-- wp:paragraph --><p>{body}</p><!-- /wp:paragraph -->")
    return "\n\n".join(blocks)


class WordPressPublisher:
    """Publishes history articles as WordPress drafts."""

    def __init__(self, status: str = "draft", timeout: float = 30.0):
        self.status = status
        self.timeout = timeout

    def publish(self, article: Article, destination: DestinationConfig) -> dict:
        if not destination.is_configured:
            raise PublishFailed("WordPress destination is not configured")

        client = WordPressClient(
            destination.site_url,
            destination.username,
            destination.application_password,
            timeout=self.timeout
        )
        post = client.create_post(article.title, to_block_content(article.content), status=self.status)
        log_event("SUCCESS", "Post published", {"post_id": post.get("id"), "article_id": article.id})
        return post
