from __future__ import annotations

import pytest
import requests

from conftest import make_story
from storyblok_seo_stack.config.settings import StoryblokConfig
from storyblok_seo_stack.content.field_path import set_path
from storyblok_seo_stack.errors import StoryblokAPIError, WriteFailure
from storyblok_seo_stack.services.storyblok_service import StoryblokService


class FakeResponse:
    def __init__(self, payload: dict, status_code: int = 200, headers: dict | None = None):
        self.payload = payload
        self.status_code = status_code
        self.headers = headers or {}
        self.text = str(payload)

    def json(self) -> dict:
        return self.payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Client Error")


class FakeSession:
    """Replays queued responses and records every request."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[dict] = []
        self.headers: dict = {}

    def request(self, method, url, params=None, json=None, timeout=None):
        self.requests.append(
            {"method": method, "url": url, "params": params, "json": json, "timeout": timeout}
        )
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _service(session: FakeSession, region: str = "eu") -> StoryblokService:
    config = StoryblokConfig(oauth_token="tok", space_id="42", region=region)
    return StoryblokService(config, session=session)


def test_session_carries_token() -> None:
    session = FakeSession()
    _service(session)
    assert session.headers["Authorization"] == "tok"
    assert session.headers["Content-Type"] == "application/json"


def test_list_stories_follows_pages() -> None:
    first = [{"id": i, "full_slug": f"s{i}", "content_type": "page"} for i in range(100)]
    second = [{"id": 100, "full_slug": "last", "is_folder": True}]
    session = FakeSession(
        FakeResponse({"stories": first}, headers={"total": "101"}),
        FakeResponse({"stories": second}, headers={"total": "101"}),
    )
    stubs = _service(session).list_stories()

    assert len(stubs) == 101
    assert stubs[-1].is_folder
    assert [r["params"]["page"] for r in session.requests] == [1, 2]
    assert session.requests[0]["params"]["per_page"] == 100
    assert session.requests[0]["url"] == "https://mapi.storyblok.com/v1/spaces/42/stories"


def test_listing_without_total_header_is_a_single_page() -> None:
    session = FakeSession(FakeResponse({"components": [{"name": "page", "schema": {}}]}))
    components = _service(session, region="us").list_components()
    assert [c.name for c in components] == ["page"]
    assert len(session.requests) == 1
    assert session.requests[0]["url"].startswith("https://api-us.storyblok.com/v1/spaces/42/")


def test_get_story_keeps_unknown_attributes() -> None:
    payload = {
        "story": {
            "id": 7,
            "full_slug": "about-us",
            "content": {"component": "page"},
            "uuid": "abc",
            "tag_list": ["x"],
        }
    }
    story = _service(FakeSession(FakeResponse(payload))).get_story(7)
    dumped = story.model_dump()
    assert story.content == {"component": "page"}
    assert dumped["uuid"] == "abc"
    assert dumped["tag_list"] == ["x"]


def test_update_story_sends_full_story_and_publish_flag() -> None:
    session = FakeSession(FakeResponse({"story": {"id": 1}}))
    story = make_story(1, "about-us")
    returned = _service(session).update_story(story, publish=True)

    request = session.requests[0]
    assert request["method"] == "PUT"
    assert request["url"].endswith("/spaces/42/stories/1")
    assert request["json"]["publish"] == 1
    assert request["json"]["story"]["uuid"] == "uuid-1"
    assert request["json"]["story"]["content"]["seo"]["plugin"] == "seo_metatags"
    assert returned == {"id": 1}


def test_update_story_sends_back_only_fetched_attributes() -> None:
    fetched = {
        "id": 7,
        "full_slug": "about-us",
        "uuid": "abc",
        "content": {"component": "page", "seo": {"description": ""}},
    }
    session = FakeSession(FakeResponse({"story": fetched}), FakeResponse({"story": {"id": 7}}))
    service = _service(session)

    story = service.get_story(7).model_copy(deep=True)
    set_path(story.content, "seo.description", "New")
    service.update_story(story)

    sent = session.requests[1]["json"]["story"]
    assert set(sent) == set(fetched)
    assert sent["uuid"] == "abc"
    assert sent["content"] == {"component": "page", "seo": {"description": "New"}}


def test_update_story_without_publish() -> None:
    session = FakeSession(FakeResponse({"story": {"id": 1}}))
    _service(session).update_story(make_story(1, "about-us"))
    assert "publish" not in session.requests[0]["json"]


def test_update_story_rejected() -> None:
    session = FakeSession(FakeResponse({"error": "invalid"}, status_code=422))
    with pytest.raises(WriteFailure) as excinfo:
        _service(session).update_story(make_story(1, "about-us"))
    assert excinfo.value.status_code == 422
    assert "about-us" in str(excinfo.value)


def test_connection_error() -> None:
    session = FakeSession(requests.exceptions.ConnectionError("refused"))
    with pytest.raises(StoryblokAPIError, match="connection error") as excinfo:
        _service(session).get_story(1)
    assert not isinstance(excinfo.value, WriteFailure)
