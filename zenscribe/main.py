"""
ZenScribe terminal front-end.

Run with: zenscribe [--data-dir DIR] [--env-file FILE] [--config FILE]
"""
import argparse
import asyncio
from datetime import datetime
from typing import Callable, Optional, Sequence

from zenscribe.config import load_config
from zenscribe.core.controller import AppController, GenerationState
from zenscribe.core.generator import ArticleGenerator, build_llm
from zenscribe.core.logger import log_event, set_log_file
from zenscribe.core.storage import FileStorage, StoreAdapter
from zenscribe.core.wordpress_api import WordPressPublisher
from zenscribe.models.article import Article, ArticleConfig
from zenscribe.models.destination import DestinationConfig
from zenscribe.models.user import User

HELP_TEXT = """Commands:
  generate       write a new article
  history        list generated articles
  show N         display article N from the history
  delete N       delete article N from the history
  publish [N]    send article N (default: displayed) to WordPress as a draft
  export [N]     save article N (default: displayed) as a text draft
  settings       edit WordPress connection settings
  login          switch profile
  logout         end the session
  help           show this help
  quit           exit"""


def ask_yes_no(message: str, input_func: Callable[[str], str] = input) -> bool:
    answer = input_func(f"{message} [y/N] ").strip().lower()
    return answer in ("y", "yes")


def render_article(article: Article) -> str:
    created = datetime.fromtimestamp(article.created_at / 1000).strftime("%Y-%m-%d %H:%M")
    header = f"# {article.title}\n({created} | keywords: {article.config.keywords} | tone: {article.config.tone})"
    return f"{header}\n\n{article.content}\n"


def render_history(articles: Sequence[Article], selected_id: Optional[str] = None) -> str:
    if not articles:
        return "No articles yet."
    lines = []
    for number, article in enumerate(articles, start=1):
        marker = "*" if article.id == selected_id else " "
        created = datetime.fromtimestamp(article.created_at / 1000).strftime("%Y-%m-%d %H:%M")
        lines.append(f"{marker}{number:>3}. {article.title}  [{created}]")
    return "\n".join(lines)


def prompt_login(input_func: Callable[[str], str] = input) -> Optional[User]:
    name = input_func("Name: ").strip()
    if not name:
        return None
    email = input_func("Email: ").strip()
    return User(name=name, email=email)


def prompt_article_config(input_func: Callable[[str], str] = input) -> ArticleConfig:
    return ArticleConfig(
        topic=input_func("Topic: ").strip(),
        keywords=input_func("Keywords (comma separated): ").strip(),
        tone=input_func("Tone: ").strip(),
    )


def prompt_destination(current: DestinationConfig, input_func: Callable[[str], str] = input) -> DestinationConfig:
    site_url = input_func(f"WordPress site URL [{current.site_url}]: ").strip() or current.site_url
    username = input_func(f"Username [{current.username}]: ").strip() or current.username
    password = input_func("Application password (blank keeps current): ").strip() or current.application_password
    return DestinationConfig.from_fields(site_url, username, password)


def _article_at(controller: AppController, arg: str) -> Optional[Article]:
    """Resolve a 1-based history number, or the displayed article when ``arg`` is empty."""
    if not arg:
        return controller.current_article
    articles = controller.history.all()
    try:
        index = int(arg) - 1
    except ValueError:
        return None
    if 0 <= index < len(articles):
        return articles[index]
    return None


def run_shell(
    controller: AppController,
    input_func: Callable[[str], str] = input,
    drafts_dir: str = "data/drafts",
) -> None:
    print("ZenScribe - AI Content Assistant. Type 'help' for commands.")
    # One loop for the whole session: the model's async HTTP client pools
    # connections on the loop that first used them.
    loop = asyncio.new_event_loop()
    try:
        _run_commands(controller, input_func, drafts_dir, loop)
    finally:
        loop.close()


def _run_commands(controller, input_func, drafts_dir, loop) -> None:
    while True:
        try:
            if controller.auth_prompt_open:
                if controller.current_user is None:
                    print("Please log in to start writing (leave the name empty to quit).")
                else:
                    print("Switch profile (leave the name empty to cancel).")
                user = prompt_login(input_func)
                if user is None:
                    if controller.current_user is None:
                        return
                    controller.close_login_prompt()
                    continue
                controller.login(user)
                print(f"Welcome, {user.name}.")
                continue

            line = input_func(f"{controller.current_user.name}> ").strip()
        except EOFError:
            return

        command, _, arg = line.partition(" ")
        arg = arg.strip()

        if command in ("quit", "exit"):
            return
        elif command == "help":
            print(HELP_TEXT)
        elif command == "generate":
            config = prompt_article_config(input_func)
            print("Writing...")
            loop.run_until_complete(controller.request_generation(config))
            if controller.generation_state == GenerationState.FAILED:
                print(controller.generation_error)
        elif command == "history":
            print(render_history(controller.history.all(), controller.selected_id))
        elif command == "show":
            article = _article_at(controller, arg)
            if article is None or not controller.select_article(article.id):
                print("No such article.")
            else:
                print(render_article(article))
        elif command == "delete":
            article = _article_at(controller, arg) if arg else None
            if article is None:
                print("Usage: delete N")
            elif controller.delete_article(article.id):
                print("Deleted.")
        elif command == "publish":
            article = _article_at(controller, arg)
            if article is None:
                print("No article selected.")
            else:
                post = controller.publish_article(article.id)
                print(f"Draft created (post {post.get('id')})." if post else controller.publish_error)
        elif command == "export":
            article = _article_at(controller, arg)
            path = controller.export_draft(article.id, drafts_dir) if article else None
            print(f"Saved to {path}" if path else "Nothing to export.")
        elif command == "settings":
            controller.update_destination_config(prompt_destination(controller.destination_config, input_func))
            state = "configured" if controller.destination_config.is_configured else "incomplete"
            print(f"WordPress settings saved ({state}).")
        elif command == "login":
            controller.open_login_prompt()
        elif command == "logout":
            controller.logout()
        elif command:
            print(f"Unknown command: {command}. Type 'help' for commands.")


def build_controller(config: dict, input_func: Callable[[str], str] = input) -> AppController:
    store = StoreAdapter(FileStorage(config["data_dir"]))
    generator = ArticleGenerator(build_llm(config))
    return AppController(
        store,
        generator,
        confirm=lambda message: ask_yes_no(message, input_func),
        publisher=WordPressPublisher(),
        on_display=lambda article: print(render_article(article)),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="zenscribe", description="AI-powered blog writing assistant")
    parser.add_argument("--config", help="JSON config file overriding environment settings")
    parser.add_argument("--env-file", help="dotenv file to load (default: search for .env)")
    parser.add_argument("--data-dir", help="directory holding history, session and settings")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config, args.env_file)
    except (FileNotFoundError, ValueError) as err:
        parser.error(str(err))
    if args.data_dir:
        config["data_dir"] = args.data_dir

    set_log_file(config["log_file"])
    log_event("INFO", "ZenScribe started", {"backend": config["llm_backend"], "data_dir": config["data_dir"]})

    controller = build_controller(config)
    run_shell(controller, drafts_dir=config["drafts_dir"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
