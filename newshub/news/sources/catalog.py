"""
Static source catalog - language -> ordered list of source descriptors
Read-only at runtime; the refresh service and the API only look things up here
"""

from typing import Dict, List, Optional, Any

from .base import FetchStrategy, Language, SourceDescriptor
from ...exceptions import SourceNotFoundError


LANGUAGES: List[Language] = [
    Language(id="en", name="English", native_name="English"),
    Language(id="kn", name="Kannada", native_name="ಕನ್ನಡ"),
    Language(id="hi", name="Hindi", native_name="हिन्दी"),
]

NEWS_SOURCES: Dict[str, List[SourceDescriptor]] = {
    "en": [
        SourceDescriptor(
            id="the-hindu",
            name="The Hindu",
            language="en",
            feed_url="https://www.thehindu.com/news/national/feeder/default.rss",
        ),
        SourceDescriptor(
            id="indian-express",
            name="The Indian Express",
            language="en",
            feed_url="https://indianexpress.com/section/india/feed/",
        ),
        SourceDescriptor(
            id="bbc-india",
            name="BBC News India",
            language="en",
            feed_url="https://feeds.bbci.co.uk/news/world/asia/india/rss.xml",
        ),
        SourceDescriptor(
            id="deccan-herald",
            name="Deccan Herald",
            language="en",
            feed_url="https://www.deccanherald.com/",
            strategy=FetchStrategy.SCRAPE,
        ),
    ],
    "kn": [
        SourceDescriptor(
            id="vijay-karnataka",
            name="Vijay Karnataka",
            language="kn",
            feed_url="https://vijaykarnataka.com/rssfeedsdefault.cms",
        ),
        SourceDescriptor(
            id="oneindia-kannada",
            name="Oneindia Kannada",
            language="kn",
            feed_url="https://kannada.oneindia.com/rss/feeds/kannada-news-fb.xml",
        ),
        SourceDescriptor(
            id="prajavani",
            name="Prajavani",
            language="kn",
            feed_url="https://www.prajavani.net/",
            strategy=FetchStrategy.SCRAPE,
        ),
        SourceDescriptor(
            id="kannada-prabha",
            name="Kannada Prabha",
            language="kn",
            feed_url="https://www.kannadaprabha.com/",
            strategy=FetchStrategy.SCRAPE,
        ),
    ],
    "hi": [
        SourceDescriptor(
            id="bbc-hindi",
            name="BBC Hindi",
            language="hi",
            feed_url="https://feeds.bbci.co.uk/hindi/rss.xml",
        ),
        SourceDescriptor(
            id="amar-ujala",
            name="Amar Ujala",
            language="hi",
            feed_url="https://www.amarujala.com/rss/breaking-news.xml",
        ),
        SourceDescriptor(
            id="news18-hindi",
            name="News18 Hindi",
            language="hi",
            feed_url="https://hindi.news18.com/",
            strategy=FetchStrategy.SCRAPE,
        ),
        SourceDescriptor(
            id="live-hindustan",
            name="Live Hindustan",
            language="hi",
            feed_url="https://www.livehindustan.com/",
            strategy=FetchStrategy.SCRAPE,
        ),
    ],
}


class SourceCatalog:
    """Lookup helpers over the language -> sources mapping"""

    def __init__(
        self,
        sources: Optional[Dict[str, List[SourceDescriptor]]] = None,
        languages: Optional[List[Language]] = None
    ):
        self._sources = sources if sources is not None else NEWS_SOURCES
        self._languages = languages if languages is not None else LANGUAGES

    @property
    def languages(self) -> List[Language]:
        return list(self._languages)

    def all_sources(self) -> List[SourceDescriptor]:
        """Every source across every language, in catalog order"""
        flattened = []
        for sources in self._sources.values():
            flattened.extend(sources)
        return flattened

    def sources_for_language(self, language: str) -> List[SourceDescriptor]:
        return list(self._sources.get(language, []))

    def find_source_by_id(self, source_id: str) -> Optional[SourceDescriptor]:
        for sources in self._sources.values():
            for source in sources:
                if source.id == source_id:
                    return source
        return None

    def get_source(self, source_id: str) -> SourceDescriptor:
        source = self.find_source_by_id(source_id)
        if source is None:
            raise SourceNotFoundError(source_id)
        return source

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        """Sources grouped by language, including languages with no sources yet"""
        grouped = {}
        known_ids = set()
        for language in self._languages:
            known_ids.add(language.id)
            grouped[language.id] = {
                "language": language,
                "sources": self.sources_for_language(language.id),
            }
        for language_id, sources in self._sources.items():
            if language_id not in known_ids:
                grouped[language_id] = {
                    "language": Language(id=language_id, name=language_id, native_name=language_id),
                    "sources": list(sources),
                }
        return grouped
