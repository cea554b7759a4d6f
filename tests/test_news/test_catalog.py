import pytest

from newshub.config import Settings
from newshub.exceptions import SourceNotFoundError
from newshub.news.sources.base import FetchStrategy
from newshub.news.sources.catalog import NEWS_SOURCES, SourceCatalog


class TestSourceCatalog:
    @pytest.fixture(autouse=True)
    def setup_catalog(self):
        self.catalog = SourceCatalog()

    def test_languages(self):
        assert [language.id for language in self.catalog.languages] == ["en", "kn", "hi"]

    def test_source_ids_unique(self):
        ids = [source.id for source in self.catalog.all_sources()]

        assert len(ids) == len(set(ids))

    def test_sources_carry_their_language(self):
        for language, sources in NEWS_SOURCES.items():
            assert all(source.language == language for source in sources)

    def test_scrape_sources(self):
        scraped = {source.id for source in self.catalog.all_sources() if source.strategy == FetchStrategy.SCRAPE}

        assert scraped == {"prajavani", "kannada-prabha", "deccan-herald", "news18-hindi", "live-hindustan"}

    def test_find_source_by_id(self):
        assert self.catalog.find_source_by_id("prajavani").language == "kn"
        assert self.catalog.find_source_by_id("missing") is None

    def test_get_source_raises_for_unknown(self):
        with pytest.raises(SourceNotFoundError) as exc_info:
            self.catalog.get_source("missing")

        assert exc_info.value.to_dict() == {
            "error_code": "SOURCE_NOT_FOUND",
            "message": "Source not found: missing",
            "details": {"source_id": "missing"},
        }

    def test_sources_for_unknown_language(self):
        assert self.catalog.sources_for_language("ta") == []


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CORS_ALLOWED_ORIGINS", raising=False)
        monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)

        settings = Settings(_env_file=None)

        assert settings.refresh_interval_minutes == 15
        assert settings.max_concurrent_refreshes == 5
        assert settings.feed_timeout_seconds == 10.0
        assert settings.news_cache_ttl_seconds == 300

    def test_allowed_origins_from_env_normalized(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", '["https://a.example/", " https://b.example"]')

        settings = Settings(_env_file=None)

        assert settings.allowed_origins == ["https://a.example", "https://b.example"]

    def test_browser_path_alias(self, monkeypatch):
        monkeypatch.setenv("PUPPETEER_EXECUTABLE_PATH", "/usr/bin/chromium")

        settings = Settings(_env_file=None)

        assert settings.browser_executable_path == "/usr/bin/chromium"
