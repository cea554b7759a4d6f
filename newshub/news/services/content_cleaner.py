"""
Content cleaning utilities for news items
Handles HTML sanitization against a fixed safelist, image sniffing and
whitespace normalization
"""

import re
import html
from typing import Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction
import structlog

logger = structlog.get_logger(__name__)

ALLOWED_TAGS = frozenset(['p', 'br', 'strong', 'em', 'a', 'ul', 'ol', 'li'])
ALLOWED_ATTRIBUTES = {'a': frozenset(['href', 'target'])}
ALLOWED_URL_SCHEMES = frozenset(['http', 'https', 'mailto', 'ftp'])

# Dropped together with everything inside them
DISCARDED_TAGS = ['script', 'style', 'noscript', 'iframe', 'object', 'embed', 'textarea', 'template']

# Non-element markup; conditional comments can carry script blocks
DISCARDED_NODE_TYPES = (Comment, Doctype, Declaration, ProcessingInstruction, CData)


class ContentCleaner:
    """Utility class for sanitizing and inspecting upstream HTML"""

    @staticmethod
    def sanitize_html(content: Optional[str]) -> str:
        """
        Strip all markup except the inline/structural safelist

        Args:
            content: Raw HTML string from a feed or scraped page

        Returns:
            HTML containing only safelisted tags, anchors limited to href/target
        """
        if not content:
            return ""

        try:
            soup = BeautifulSoup(content, 'html.parser')

            for node in soup.find_all(string=lambda text: isinstance(text, DISCARDED_NODE_TYPES)):
                node.extract()

            for tag in soup(DISCARDED_TAGS):
                tag.decompose()

            for tag in soup.find_all(True):
                if tag.name not in ALLOWED_TAGS:
                    tag.unwrap()
                    continue

                allowed = ALLOWED_ATTRIBUTES.get(tag.name, frozenset())
                tag.attrs = {
                    name: value for name, value in tag.attrs.items()
                    if name in allowed and ContentCleaner._is_safe_attribute(name, value)
                }

            return str(soup).strip()

        except Exception as e:
            logger.warning("sanitize_html_failed", error=str(e))
            # Fallback to plain text with every tag removed
            return ContentCleaner.strip_tags(content)

    @staticmethod
    def _is_safe_attribute(name: str, value) -> bool:
        if name != 'href':
            return True
        if not isinstance(value, str):
            return False
        scheme = urlparse(value.strip()).scheme.lower()
        return not scheme or scheme in ALLOWED_URL_SCHEMES

    @staticmethod
    def strip_tags(content: Optional[str]) -> str:
        """Simple fallback HTML tag removal"""
        if not content:
            return ""
        text = re.sub(r'<[^>]+>', '', content)
        text = html.unescape(text)
        return ContentCleaner.normalize_whitespace(text)

    @staticmethod
    def normalize_whitespace(text: Optional[str]) -> str:
        if not text:
            return ""
        return re.sub(r'\s+', ' ', text).strip()

    @staticmethod
    def extract_first_image(content: Optional[str], base_url: Optional[str] = None) -> Optional[str]:
        """
        Find the first embedded image reference in an HTML body

        Args:
            content: HTML body
            base_url: Used to resolve relative image paths

        Returns:
            Image URL or None
        """
        if not content:
            return None

        try:
            soup = BeautifulSoup(content, 'html.parser')
            img = soup.find('img', src=True)
        except Exception as e:
            logger.debug("image_sniff_failed", error=str(e))
            return None

        if img is None:
            return None

        src = img['src'].strip()
        if not src:
            return None
        if base_url and not urlparse(src).scheme:
            return urljoin(base_url, src)
        return src
