"""Tests for the terminal front-end."""
import asyncio

import pytest

from zenscribe import main
from zenscribe.core.controller import AppController
from zenscribe.models import Article, ArticleConfig, DestinationConfig, GeneratedText


class ScriptedInput:
    def __init__(self, *lines):
        self.lines = list(lines)
        self.prompts = []

    def __call__(self, prompt=""):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


class LoopBoundGenerator:
    """Fails like a pooled async HTTP client once used from a second event loop."""

    def __init__(self):
        self.loop = None
        self.calls = 0

    async def generate(self, config):
        loop = asyncio.get_running_loop()
        if self.loop is None:
            self.loop = loop
        if loop is not self.loop:
            raise RuntimeError("Event loop is closed")
        self.calls += 1
        return GeneratedText(title=f"An article about {config.topic}", content="body")


@pytest.fixture
def shell(store, generator):
    def _make(*lines):
        script = ScriptedInput(*lines)
        controller = AppController(
            store,
            generator,
            confirm=lambda message: main.ask_yes_no(message, script),
        )
        return controller, script
    return _make


class TestHelpers:
    def test_ask_yes_no(self):
        assert main.ask_yes_no("Sure?", ScriptedInput("y")) is True
        assert main.ask_yes_no("Sure?", ScriptedInput("YES")) is True
        assert main.ask_yes_no("Sure?", ScriptedInput("")) is False
        assert main.ask_yes_no("Sure?", ScriptedInput("nope")) is False

    def test_render_history(self):
        article = Article.create(
            GeneratedText(title="An article about tea", content="Tea."),
            ArticleConfig(topic="tea", keywords="", tone=""),
            article_id="a1",
            created_at=0,
        )
        assert main.render_history([]) == "No articles yet."
        listing = main.render_history([article], selected_id="a1")
        assert listing.startswith("*  1. An article about tea")

    def test_prompt_destination_keeps_blank_fields(self):
        current = DestinationConfig.from_fields("https://blog.example.com", "editor", "secret")
        updated = main.prompt_destination(current, ScriptedInput("", "writer", ""))
        assert updated.site_url == "https://blog.example.com"
        assert updated.username == "writer"
        assert updated.application_password == "secret"
        assert updated.is_configured is True

    def test_prompt_login_empty_name(self):
        assert main.prompt_login(ScriptedInput("")) is None


class TestRunShell:
    def test_login_generate_and_quit(self, shell, capsys):
        controller, script = shell(
            "Aki", "a@x.com",
            "generate", "coffee", "brew,bean", "casual",
            "history",
            "quit",
        )
        main.run_shell(controller, script)

        assert controller.current_user.name == "Aki"
        assert len(controller.history.all()) == 1
        out = capsys.readouterr().out
        assert "Welcome, Aki." in out
        assert "coffee article" in out

    def test_generations_share_one_event_loop(self, store):
        loop_bound = LoopBoundGenerator()
        script = ScriptedInput(
            "Aki", "a@x.com",
            "generate", "coffee", "", "",
            "generate", "tea", "", "",
            "generate", "cocoa", "", "",
        )
        controller = AppController(store, loop_bound, confirm=lambda message: False)

        main.run_shell(controller, script)

        assert loop_bound.calls == 3
        assert [a.config.topic for a in controller.history.all()] == ["cocoa", "tea", "coffee"]
        assert controller.generation_error is None
        assert loop_bound.loop.is_closed()

    def test_empty_login_exits(self, shell):
        controller, script = shell("")
        main.run_shell(controller, script)
        assert controller.current_user is None

    def test_empty_name_on_profile_switch_cancels(self, shell, capsys):
        controller, script = shell(
            "Aki", "a@x.com",
            "login", "",
            "history",
            "quit",
        )
        main.run_shell(controller, script)

        assert controller.current_user.name == "Aki"
        assert controller.auth_prompt_open is False
        assert script.lines == []
        assert "No articles yet." in capsys.readouterr().out

    def test_delete_needs_confirmation(self, shell):
        controller, script = shell(
            "Aki", "a@x.com",
            "generate", "coffee", "", "",
            "delete 1", "n",
            "delete 1", "y",
        )
        main.run_shell(controller, script)
        assert controller.history.all() == ()

    def test_logout_reopens_login(self, shell):
        controller, script = shell(
            "Aki", "a@x.com",
            "logout", "y",
            "Ren", "r@x.com",
        )
        main.run_shell(controller, script)
        assert controller.current_user.name == "Ren"

    def test_export(self, shell, tmp_path, capsys):
        controller, script = shell(
            "Aki", "a@x.com",
            "generate", "coffee", "", "",
            "export",
        )
        main.run_shell(controller, script, drafts_dir=str(tmp_path))
        article = controller.history.all()[0]
        assert (tmp_path / f"coffee article_{article.id}.txt").exists()
        assert "Saved to" in capsys.readouterr().out

    def test_unknown_command(self, shell, capsys):
        controller, script = shell("Aki", "a@x.com", "dance")
        main.run_shell(controller, script)
        assert "Unknown command: dance" in capsys.readouterr().out


class TestMain:
    def test_missing_config_exits_with_usage_error(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main.main(["--config", str(tmp_path / "missing.json"), "--env-file", str(tmp_path / "none.env")])
        assert exc.value.code == 2
