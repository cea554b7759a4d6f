"""
Selector rules for scrape-only sources, keyed by scraper key
Bump the version when a site's rules change so log lines show which rule set ran
"""

from typing import Dict, Optional

from .selector_extractor import SelectorExtractor, SelectorRules


PRAJAVANI_RULES = SelectorRules(
    key="prajavani",
    version="2024.2",
    base_url="https://www.prajavani.net",
    item_selector="div.story-card",
    link_selector="a.headline-link, a",
    wait_selector="div.story-card",
)

DECCAN_HERALD_RULES = SelectorRules(
    key="deccan-herald",
    version="2024.2",
    base_url="https://www.deccanherald.com/",
    item_selector="div.story-card",
    link_selector="a.headline-link, a",
    wait_selector="div.story-card",
)

KANNADA_PRABHA_RULES = SelectorRules(
    key="kannada-prabha",
    version="2024.2",
    base_url="https://www.kannadaprabha.com",
    item_selector="div[class*='story-card'], div[class*='storycard']",
    link_selector="a",
    title_selector=None,
    wait_selector="div[class*='story-card']",
    # Section navigation links sit inside the same cards as the stories
    excluded_link_selector="a.arrow-component.arr--section-name",
    excluded_titles=("ದೇಶ", "ರಾಜ್ಯ", "ವಿಶ್ವ"),
)

NEWS18_HINDI_RULES = SelectorRules(
    key="news18-hindi",
    version="2024.1",
    base_url="https://hindi.news18.com",
    item_selector="li.news_item, div.blog_list_row, div[class*='story']",
    link_selector="a[href*='/news/']",
    title_selector="h2, h3, figcaption",
    image_selector="img",
    wait_selector="a[href*='/news/']",
)

LIVE_HINDUSTAN_RULES = SelectorRules(
    key="live-hindustan",
    version="2024.1",
    base_url="https://www.livehindustan.com",
    item_selector="div.card-sm, div.card-lg, div[class*='listingNews']",
    link_selector="a[href*='/story-']",
    title_selector="h2, h3, .headline",
    image_selector="img",
    wait_selector="a[href*='/story-']",
)

SITE_RULES: Dict[str, SelectorRules] = {
    rules.key: rules
    for rules in (
        PRAJAVANI_RULES,
        DECCAN_HERALD_RULES,
        KANNADA_PRABHA_RULES,
        NEWS18_HINDI_RULES,
        LIVE_HINDUSTAN_RULES,
    )
}


def build_extractors(rules: Optional[Dict[str, SelectorRules]] = None) -> Dict[str, SelectorExtractor]:
    return {key: SelectorExtractor(rule_set) for key, rule_set in (rules or SITE_RULES).items()}
