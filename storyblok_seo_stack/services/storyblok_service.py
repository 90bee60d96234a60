# -*- coding: utf-8 -*-
"""
Storyblok Management API Service
=================================
Client for the Storyblok Management API (v1). Provides methods for:
  - Listing all stories of a space (paginated)
  - Fetching a full story including its content
  - Listing the component catalog
  - Updating (and optionally publishing) a story

Authentication uses a personal OAuth access token, NOT the access token of
a space.

API Docs: https://www.storyblok.com/docs/api/management
"""

import logging
from typing import Any, Optional

import requests

from storyblok_seo_stack.config.settings import StoryblokConfig
from storyblok_seo_stack.errors import StoryblokAPIError, WriteFailure
from storyblok_seo_stack.models import ComponentDefinition, Story, StoryStub

logger = logging.getLogger("storyblok.api")


class StoryblokService:
    """
    Storyblok Management API client.

    Usage:
        service = StoryblokService(settings.storyblok)
        stubs = service.list_stories()
        story = service.get_story(stubs[0].id)
        service.update_story(story, publish=False)
    """

    PER_PAGE = 100

    def __init__(self, config: StoryblokConfig, session: Optional[requests.Session] = None):
        self.space_id = config.space_id
        self.base_url = config.base_url.rstrip("/")
        self.timeout = config.timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": config.oauth_token,
                "Content-Type": "application/json",
            }
        )
        logger.info(
            "StoryblokService initialized (space=%s, region=%s)",
            self.space_id,
            config.region,
        )

    def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
        json_body: Optional[dict] = None,
    ) -> requests.Response:
        """
        Make an authenticated request against the space.

        Args:
            method: HTTP method.
            endpoint: Path below /spaces/{space_id} (e.g., "/stories").
            params: Query parameters.
            json_body: JSON request body.

        Returns:
            The successful response.

        Raises:
            StoryblokAPIError: On HTTP or connection errors.
        """
        url = f"{self.base_url}/spaces/{self.space_id}{endpoint}"
        try:
            response = self.session.request(
                method, url, params=params, json=json_body, timeout=self.timeout
            )
            response.raise_for_status()
            return response

        except requests.exceptions.HTTPError as exc:
            logger.error("Storyblok API HTTP error: %s — %s", exc, response.text[:300])
            raise StoryblokAPIError(
                f"Storyblok API error: {exc}", status_code=response.status_code
            ) from exc
        except requests.exceptions.RequestException as exc:
            logger.error("Storyblok API request failed: %s", exc)
            raise StoryblokAPIError(f"Storyblok API connection error: {exc}") from exc

    def _get_all(self, endpoint: str, key: str, params: Optional[dict] = None) -> list[dict]:
        """Fetch every page of a paginated listing and return the items under ``key``."""
        items: list[dict] = []
        page = 1
        while True:
            request_params = {"per_page": self.PER_PAGE, "page": page}
            if params:
                request_params.update(params)

            response = self._request("GET", endpoint, params=request_params)
            batch = response.json().get(key, [])
            items.extend(batch)

            # Listings without a "total" header are not paginated
            total = response.headers.get("total")
            if total is None or not batch or len(items) >= int(total):
                break
            page += 1

        logger.debug("Fetched %d %s in %d page(s)", len(items), key, page)
        return items

    # ------------------------------------------------------------------
    # Stories
    # ------------------------------------------------------------------

    def list_stories(self) -> list[StoryStub]:
        """List all stories (and folders) of the space without content."""
        return [StoryStub.model_validate(raw) for raw in self._get_all("/stories", "stories")]

    def get_story(self, story_id: int) -> Story:
        """Fetch a single story including its content tree."""
        data = self._request("GET", f"/stories/{story_id}").json()
        return Story.model_validate(data["story"])

    def update_story(self, story: Story, publish: bool = False) -> dict[str, Any]:
        """
        Submit the full story object back to Storyblok.

        Args:
            story: The (locally modified) story.
            publish: Also publish the story. May publish previously
                unpublished stories.

        Returns:
            The updated story as returned by the API.

        Raises:
            WriteFailure: If the update request fails.
        """
        # Only attributes present on the fetched story are sent back
        body: dict[str, Any] = {"story": story.model_dump(mode="json", exclude_unset=True)}
        if publish:
            body["publish"] = 1

        try:
            response = self._request("PUT", f"/stories/{story.id}", json_body=body)
        except StoryblokAPIError as exc:
            raise WriteFailure(
                f"Updating story {story.full_slug} failed: {exc}",
                status_code=exc.status_code,
            ) from exc

        logger.info("Updated story %s (id=%s, publish=%s)", story.full_slug, story.id, publish)
        return response.json().get("story", {})

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def list_components(self) -> list[ComponentDefinition]:
        """List the component catalog of the space."""
        return [
            ComponentDefinition.model_validate(raw)
            for raw in self._get_all("/components", "components")
        ]
