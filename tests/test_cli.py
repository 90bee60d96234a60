from __future__ import annotations

import json

import pytest

from conftest import FakeAgent, FakeStoryblok, make_story
from storyblok_seo_stack.errors import SchemaConsistencyError, StoryblokAPIError
from storyblok_seo_stack.pipeline import generate_meta_descriptions as cli
from storyblok_seo_stack.pipeline.update_pipeline import UpdatePipeline

ARGV = [
    "--token", "tok",
    "--space", "42",
    "--gemini-api-key", "key",
    "--language", "en",
    "--target-field", "seo.description",
]


@pytest.fixture(autouse=True)
def isolated(monkeypatch):
    monkeypatch.setattr(cli, "load_environment", lambda: None)
    for key in ("STORYBLOK_OAUTH_TOKEN", "STORYBLOK_SPACE_ID", "GEMINI_API_KEY"):
        monkeypatch.delenv(key, raising=False)


def _fake_run(storyblok, agent):
    def run(settings):
        return UpdatePipeline(storyblok, agent, settings.run).run()

    return run


def test_configuration_error_exits_with_1(capsys) -> None:
    assert cli.main(["--language", "en"]) == 1
    output = json.loads(capsys.readouterr().out)
    assert output["success"] is False
    assert "STORYBLOK_OAUTH_TOKEN" in output["error"]


@pytest.mark.parametrize(
    "error",
    [SchemaConsistencyError("hero_v2"), StoryblokAPIError("Storyblok API error: 401")],
)
def test_fatal_run_errors_exit_with_1(monkeypatch, capsys, error) -> None:
    def run(settings):
        raise error

    monkeypatch.setattr(cli, "run", run)
    assert cli.main(ARGV) == 1
    output = json.loads(capsys.readouterr().out)
    assert output == {"success": False, "error": str(error)}


def test_successful_run_prints_summary(monkeypatch, capsys) -> None:
    storyblok = FakeStoryblok([make_story(1, "about-us"), make_story(2, "contact")])
    monkeypatch.setattr(cli, "run", _fake_run(storyblok, FakeAgent()))

    assert cli.main([*ARGV, "--dry-run"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["success"] is True
    assert output["tokens"] == {"prompt": 200, "completion": 40, "total": 240, "calls": 2}
    assert output["stories"]["processed"] == 2
    assert output["stories"]["dry_run"] == 2
    assert storyblok.updates == []


def test_story_failure_sets_exit_status(monkeypatch, capsys) -> None:
    storyblok = FakeStoryblok([make_story(1, "about-us")])
    monkeypatch.setattr(cli, "run", _fake_run(storyblok, FakeAgent(fail_for={"Welcome"})))

    assert cli.main(ARGV) == 1
    output = json.loads(capsys.readouterr().out)
    assert output["success"] is False
    assert output["stories"]["failed"] == 1


def test_help_lists_examples(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--help"])
    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert "minimal example:" in out
    assert "--target-field" in out
