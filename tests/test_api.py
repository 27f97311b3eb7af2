import pytest
from fastapi.testclient import TestClient

from feedbrief.api import create_app
from feedbrief.exceptions import ItemNotFoundError, PipelineError
from feedbrief.pipeline import FeedDigest, ProcessedItem

from conftest import SOURCE_URL, make_item


class StubPipeline:
    def __init__(self, error=None):
        self.error = error
        self.requested = []

    async def process_all(self):
        if self.error:
            raise self.error
        item = make_item(1, pub_date="Mon, 01 Jan 2024 10:00:00 GMT", image_url="https://img.example.com/1.jpg")
        return FeedDigest(
            sources=[SOURCE_URL],
            last_updated="2024-01-05T12:00:00Z",
            items=[ProcessedItem.from_item(item, "A short summary.")],
        )

    async def process_one(self, guid):
        self.requested.append(guid)
        if self.error:
            raise self.error
        if guid != "story/42":
            raise ItemNotFoundError(guid)
        return ProcessedItem.from_item(make_item(42, guid=guid), "Single summary.")


def _client(config, pipeline):
    return TestClient(create_app(config, pipeline=pipeline))


class TestFeedsAll:
    def test_digest_shape(self, config):
        response = _client(config, StubPipeline()).get("/feeds/all")

        assert response.status_code == 200
        data = response.json()
        assert data["sources"] == [SOURCE_URL]
        assert data["lastUpdated"] == "2024-01-05T12:00:00Z"
        assert data["items"] == [
            {
                "guid": "item-1",
                "title": "Title 1",
                "description": "Teaser for item-1",
                "summarized_content": "A short summary.",
                "imageUrl": "https://img.example.com/1.jpg",
                "sourceName": "World News",
                "pubDate": "Mon, 01 Jan 2024 10:00:00 GMT",
            }
        ]

    def test_pipeline_failure(self, config):
        pipeline = StubPipeline(error=PipelineError("Failed to process feeds: boom"))
        response = _client(config, pipeline).get("/feeds/all")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to process feeds",
            "message": "Failed to process feeds: boom",
        }


class TestFeedItem:
    def test_guid_with_slash(self, config):
        pipeline = StubPipeline()
        response = _client(config, pipeline).get("/feeds/item/story/42")

        assert response.status_code == 200
        assert response.json()["guid"] == "story/42"
        assert response.json()["summarized_content"] == "Single summary."
        assert pipeline.requested == ["story/42"]

    def test_not_found(self, config):
        response = _client(config, StubPipeline()).get("/feeds/item/unknown")

        assert response.status_code == 404
        assert response.json() == {"error": "Item not found"}

    def test_fetch_failure(self, config):
        pipeline = StubPipeline(error=PipelineError("Failed to fetch item: boom"))
        response = _client(config, pipeline).get("/feeds/item/story/42")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch item"}


@pytest.mark.parametrize("path", ["/feeds", "/feeds/other"])
def test_unknown_routes(config, path):
    assert _client(config, StubPipeline()).get(path).status_code == 404
