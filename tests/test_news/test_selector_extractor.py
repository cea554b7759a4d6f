import pytest

from newshub.news.services.scrapers.selector_extractor import SelectorExtractor, SelectorRules
from newshub.news.services.scrapers.site_rules import (
    KANNADA_PRABHA_RULES,
    PRAJAVANI_RULES,
    SITE_RULES,
    build_extractors,
)


STORY_CARDS = """
<html><body>
  <div class="story-card">
    <a class="headline-link" href="/state/bengaluru/metro-line-opens"><h2>Metro line opens</h2></a>
    <p>Commuters cheer new route</p>
  </div>
  <div class="story-card">
    <a href="https://www.prajavani.net/sports/cricket-win"><h3> Cricket win </h3></a>
  </div>
  <div class="story-card">
    <a href="/state/bengaluru/metro-line-opens"><h2>Metro line opens again</h2></a>
  </div>
  <div class="story-card"><a href="javascript:void(0)">Broken</a></div>
  <div class="story-card"><a href="#top">Top</a></div>
  <div class="story-card"><span>No link here</span></div>
</body></html>
"""


class TestSelectorExtractor:
    @pytest.fixture(autouse=True)
    def setup_extractor(self):
        self.extractor = SelectorExtractor(PRAJAVANI_RULES)

    def test_extracts_story_cards(self):
        records = self.extractor.extract(STORY_CARDS)

        assert [record.link for record in records] == [
            "https://www.prajavani.net/state/bengaluru/metro-line-opens",
            "https://www.prajavani.net/sports/cricket-win",
        ]
        assert records[0].title == "Metro line opens"
        assert records[0].description == "Commuters cheer new route"
        assert records[1].title == "Cricket win"

    def test_duplicate_links_dropped(self):
        records = self.extractor.extract(STORY_CARDS)

        titles = [record.title for record in records]
        assert "Metro line opens again" not in titles

    def test_title_falls_back_to_anchor_text(self):
        markup = '<div class="story-card"><a href="/a">Plain anchor title</a></div>'

        records = self.extractor.extract(markup)

        assert records[0].title == "Plain anchor title"

    def test_empty_markup(self):
        assert self.extractor.extract(None) == []
        assert self.extractor.extract("") == []
        assert self.extractor.extract("<html><body><p>nothing</p></body></html>") == []


class TestKannadaPrabhaRules:
    @pytest.fixture(autouse=True)
    def setup_extractor(self):
        self.extractor = SelectorExtractor(KANNADA_PRABHA_RULES)

    def test_section_links_and_titles_excluded(self):
        markup = """
        <div class="story-card-wrapper">
          <a class="arrow-component arr--section-name" href="/nation">ದೇಶ</a>
          <a href="/nation/2024/may/01/story-one">ಮೊದಲ ಸುದ್ದಿ</a>
        </div>
        <div class="storycard-xyz">
          <a href="/state">ರಾಜ್ಯ</a>
        </div>
        <div class="storycard-abc">
          <a href="/world/2024/may/01/story-two">ಎರಡನೇ ಸುದ್ದಿ</a>
        </div>
        """

        records = self.extractor.extract(markup)

        assert [record.link for record in records] == [
            "https://www.kannadaprabha.com/nation/2024/may/01/story-one",
            "https://www.kannadaprabha.com/world/2024/may/01/story-two",
        ]
        assert records[0].title == "ಮೊದಲ ಸುದ್ದಿ"


class TestSiteRules:
    def test_every_scrape_source_has_rules(self):
        assert set(SITE_RULES) == {"prajavani", "deccan-herald", "kannada-prabha", "news18-hindi", "live-hindustan"}

    def test_build_extractors(self):
        extractors = build_extractors()

        assert set(extractors) == set(SITE_RULES)
        assert extractors["prajavani"].rules is PRAJAVANI_RULES

    def test_custom_rules(self):
        rules = SelectorRules(key="custom", version="1", base_url="https://c.example", item_selector="article")

        extractors = build_extractors({"custom": rules})

        records = extractors["custom"].extract('<article><a href="/x"><h1>Headline</h1></a></article>')
        assert records[0].link == "https://c.example/x"
        assert records[0].title == "Headline"
