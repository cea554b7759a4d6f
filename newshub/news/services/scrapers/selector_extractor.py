"""
Selector-driven extraction of news candidates from page markup
Site-specific knowledge lives in SelectorRules; the extractor itself is the
same for every scraped source and never touches the network
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
import structlog

from ...sources.base import RawNewsRecord

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SelectorRules:
    """
    Versioned selector configuration for one website.

    item_selector picks the story containers, link_selector the anchor inside a
    container (first match in document order). The title is read from
    title_selector inside the anchor, falling back to the anchor text.
    """
    key: str
    version: str
    base_url: str
    item_selector: str
    link_selector: str = "a"
    title_selector: Optional[str] = "h1, h2, h3"
    description_selector: Optional[str] = "p, .summary, .excerpt"
    image_selector: Optional[str] = None
    wait_selector: Optional[str] = None
    excluded_link_selector: Optional[str] = None
    excluded_titles: Tuple[str, ...] = field(default_factory=tuple)


class SelectorExtractor:
    """Uniform extract(markup) -> RawNewsRecord[] capability for one rule set"""

    def __init__(self, rules: SelectorRules):
        self.rules = rules

    def extract(self, markup: Optional[str]) -> List[RawNewsRecord]:
        if not markup:
            return []

        soup = BeautifulSoup(markup, "html.parser")
        records = []
        seen_links = set()

        for container in soup.select(self.rules.item_selector):
            record = self._extract_candidate(container)
            if record is None or record.link in seen_links:
                continue
            seen_links.add(record.link)
            records.append(record)

        logger.debug(
            "selector_extraction_completed",
            rules=self.rules.key,
            version=self.rules.version,
            candidates=len(records)
        )
        return records

    def _extract_candidate(self, container) -> Optional[RawNewsRecord]:
        anchor = self._find_link(container)
        if anchor is None:
            return None

        title = self._extract_title(anchor)
        link = self._resolve_link(anchor.get("href"))
        if not title or not link:
            return None

        if self._is_excluded_title(title):
            return None

        return RawNewsRecord(
            title=title,
            link=link,
            description=self._extract_description(container),
            image_url=self._extract_image(container),
        )

    def _find_link(self, container):
        excluded = self.rules.excluded_link_selector
        for anchor in container.select(self.rules.link_selector):
            if excluded and anchor.css.match(excluded):
                continue
            return anchor
        return None

    def _extract_title(self, anchor) -> str:
        if self.rules.title_selector:
            heading = anchor.select_one(self.rules.title_selector)
            if heading is not None:
                text = heading.get_text(" ", strip=True)
                if text:
                    return text
        return anchor.get_text(" ", strip=True)

    def _extract_description(self, container) -> str:
        if not self.rules.description_selector:
            return ""
        element = container.select_one(self.rules.description_selector)
        return element.get_text(" ", strip=True) if element is not None else ""

    def _extract_image(self, container) -> Optional[str]:
        if not self.rules.image_selector:
            return None
        image = container.select_one(self.rules.image_selector)
        if image is None:
            return None
        src = image.get("src") or image.get("data-src")
        return self._resolve_link(src)

    def _resolve_link(self, href: Optional[str]) -> Optional[str]:
        if not href:
            return None
        href = href.strip()
        if not href or href.startswith(("#", "javascript:", "mailto:")):
            return None
        resolved = urljoin(self.rules.base_url, href)
        if urlparse(resolved).scheme not in ("http", "https"):
            return None
        return resolved

    def _is_excluded_title(self, title: str) -> bool:
        return any(term in title for term in self.rules.excluded_titles)
