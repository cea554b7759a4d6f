import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock, AsyncMock
import httpx
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from newshub.core.database import Base
from newshub.news.models import news_item  # noqa: F401
from newshub.news.sources.base import FetchStrategy, Language, NewsItem, RawNewsRecord, SourceDescriptor
from newshub.news.sources.catalog import SourceCatalog
from newshub.repositories.news_repository import NewsRepository


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'news_hub_test.db'}",
        connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def repository(session_factory):
    return NewsRepository(session_factory)


@pytest.fixture
def sample_catalog():
    return SourceCatalog(
        sources={
            "en": [
                SourceDescriptor(id="alpha", name="Alpha Times", language="en", feed_url="https://alpha.example/rss"),
                SourceDescriptor(
                    id="gamma",
                    name="Gamma Daily",
                    language="en",
                    feed_url="https://gamma.example/",
                    strategy=FetchStrategy.SCRAPE,
                ),
            ],
            "kn": [
                SourceDescriptor(id="beta", name="Beta Patrike", language="kn", feed_url="https://beta.example/rss"),
            ],
        },
        languages=[
            Language(id="en", name="English", native_name="English"),
            Language(id="kn", name="Kannada", native_name="ಕನ್ನಡ"),
            Language(id="hi", name="Hindi", native_name="हिन्दी"),
        ],
    )


@pytest.fixture
def make_item():
    def _make(guid, source_id="alpha", language="en", title=None, published_at=None, **kwargs):
        return NewsItem(
            guid=guid,
            source_id=source_id,
            language=language,
            title=title or f"Story {guid}",
            link=kwargs.pop("link", f"https://{source_id}.example/{guid}"),
            published_at=published_at or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
            **kwargs
        )
    return _make


@pytest.fixture
def make_record():
    def _make(guid, title=None, **kwargs):
        return RawNewsRecord(
            title=title or f"Story {guid}",
            link=kwargs.pop("link", f"https://news.example/{guid}"),
            guid=guid,
            **kwargs
        )
    return _make


@pytest.fixture
def sample_rss_feed():
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/" xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>Alpha Times</title>
    <link>https://alpha.example/</link>
    <description>Latest</description>
    <item>
      <title>Monsoon reaches Kerala</title>
      <link>https://alpha.example/monsoon</link>
      <guid>alpha-1</guid>
      <description><![CDATA[<p>Rains arrive <script>alert(1)</script>early.</p>]]></description>
      <pubDate>Wed, 01 May 2024 10:30:00 +0530</pubDate>
      <dc:creator>Staff Reporter</dc:creator>
      <category>Weather</category>
      <media:thumbnail url="https://alpha.example/monsoon.jpg" />
    </item>
    <item>
      <title>Markets close higher</title>
      <link>https://alpha.example/markets</link>
      <description>Sensex gains</description>
      <enclosure url="https://alpha.example/markets.jpg" type="image/jpeg" length="1024" />
    </item>
  </channel>
</rss>
"""


@pytest.fixture
def mock_httpx_response():
    response = MagicMock(spec=httpx.Response)
    response.text = "<html><body></body></html>"
    response.content = b""
    response.raise_for_status = MagicMock()
    return response


@pytest.fixture
def mock_fetch_chain():
    chain = MagicMock()
    chain.fetch = AsyncMock(return_value=[])
    return chain
