import pytest

from feedbrief.config import ConfigModel, PipelineConfig, SourceConfig
from feedbrief.ingestion import CanonicalItem

SOURCE_URL = "https://news.example.com/rss"

RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">
  <channel>
    <title>World News</title>
    <link>https://news.example.com</link>
    <description>Latest world headlines</description>
    <item>
      <title>Enclosure and inline image</title>
      <link>https://news.example.com/articles/1</link>
      <guid isPermaLink="false">story-1</guid>
      <description><![CDATA[<p><img src="https://img.example.com/inline-1.jpg" /> Teaser one</p>]]></description>
      <pubDate>Mon, 01 Jan 2024 10:00:00 GMT</pubDate>
      <enclosure url="https://img.example.com/enclosure-1.jpg" type="image/jpeg" length="1024" />
    </item>
    <item>
      <title>Inline image only</title>
      <link>https://news.example.com/articles/2</link>
      <guid isPermaLink="false">story-2</guid>
      <description><![CDATA[<p>Teaser two <img src="https://img.example.com/inline-2.jpg" /></p>]]></description>
      <pubDate>Tue, 02 Jan 2024 10:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Media content</title>
      <link>https://news.example.com/articles/3</link>
      <description>Teaser three</description>
      <media:content url="https://img.example.com/media-3.jpg" type="image/jpeg" medium="image" />
    </item>
    <item>
      <title>Media thumbnail</title>
      <link>https://news.example.com/articles/4</link>
      <description>Teaser four</description>
      <media:thumbnail url="https://img.example.com/thumb-4.jpg" width="120" height="80" />
    </item>
    <item>
      <title>Audio enclosure</title>
      <description>No link here</description>
      <pubDate>Wed, 03 Jan 2024 08:00:00 GMT</pubDate>
      <enclosure url="https://cdn.example.com/audio-5.mp3" type="audio/mpeg" length="2048" />
    </item>
  </channel>
</rss>
"""

ATOM_FEED = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example Atom</title>
  <id>tag:example.org,2024:feed</id>
  <updated>2024-01-05T10:00:00Z</updated>
  <entry>
    <title>Atom entry</title>
    <id>tag:example.org,2024:1</id>
    <link rel="alternate" type="text/html" href="https://example.org/atom/1" />
    <link rel="enclosure" type="image/png" href="https://example.org/atom/1.png" />
    <published>2024-01-04T09:00:00Z</published>
    <updated>2024-01-05T10:00:00Z</updated>
    <summary>Atom summary text</summary>
  </entry>
  <entry>
    <title>Updated only</title>
    <id>tag:example.org,2024:2</id>
    <updated>2024-01-03T10:00:00Z</updated>
    <summary>Second summary</summary>
  </entry>
</feed>
"""


def make_item(index, **overrides) -> CanonicalItem:
    data = dict(
        guid=f"item-{index}",
        title=f"Title {index}",
        description=f"Teaser for item-{index}",
        link=f"https://news.example.com/articles/{index}",
        pub_date="No Date",
        image_url=None,
        source=SOURCE_URL,
        source_name="World News",
    )
    data.update(overrides)
    return CanonicalItem(**data)


@pytest.fixture
def config() -> ConfigModel:
    return ConfigModel(
        sources=[SourceConfig(url=SOURCE_URL)],
        pipeline=PipelineConfig(batch_size=3, batch_delay_ms=0),
    )
