"""Reduce a recipe page to the plain text most likely to hold the recipe."""

import logging
import re
from typing import Callable, List, Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

NO_CONTENT_AVAILABLE = "No content available"
NO_RECIPE_CONTENT = "No recipe content found"

MIN_CANDIDATE_HTML_LENGTH = 100
MIN_KEYWORD_BLOCK_TEXT_LENGTH = 200

BOILERPLATE_SELECTORS = (
    "script, style, nav, header, footer, .advertisement, .ads, .social-share, "
    ".comments, .sidebar, .menu, .navigation"
)
CANDIDATE_BOILERPLATE_SELECTORS = (
    "script, style, .advertisement, .ads, .social-share, .comments, .sidebar, "
    ".menu, .navigation, .popup, .modal"
)
RECIPE_SELECTORS = [
    '[itemtype*="Recipe"]',
    ".recipe-card",
    ".recipe-content",
    ".recipe-post",
    ".recipe-container",
    ".recipe",
    ".entry-recipe",
    ".post-recipe",
]
MAIN_CONTENT_SELECTORS = [
    "main",
    "article",
    ".entry-content",
    ".post-content",
    ".content",
    "#content",
    ".main-content",
]
RECIPE_KEYWORDS = ["ingredients", "instructions", "directions", "recipe", "cook", "prep"]


def strip_boilerplate(soup: BeautifulSoup, selectors: str = BOILERPLATE_SELECTORS) -> None:
    """Remove obvious non-content nodes in place."""
    for node in soup.select(selectors):
        # Nested matches are already gone once their ancestor is decomposed.
        if not node.decomposed:
            node.decompose()


def _first_matching(soup: BeautifulSoup, selectors: List[str]) -> Optional[str]:
    for selector in selectors:
        element = soup.select_one(selector)
        if element is not None:
            logger.info("Found content with selector: %s", selector)
            return element.decode_contents()
    return None


def _by_recipe_selectors(soup: BeautifulSoup) -> Optional[str]:
    return _first_matching(soup, RECIPE_SELECTORS)


def _by_main_content(soup: BeautifulSoup) -> Optional[str]:
    return _first_matching(soup, MAIN_CONTENT_SELECTORS)


def keyword_score(text: str) -> int:
    lowered = text.lower()
    return sum(1 for keyword in RECIPE_KEYWORDS if keyword in lowered)


def _by_keyword_score(soup: BeautifulSoup) -> Optional[str]:
    best = None
    best_score = 0
    for element in soup.find_all(["div", "section", "article"]):
        text = element.get_text()
        score = keyword_score(text)
        if score > best_score and len(text) > MIN_KEYWORD_BLOCK_TEXT_LENGTH:
            best_score = score
            best = element
    if best is None:
        return None
    logger.info("Found content with keyword matching (score: %d)", best_score)
    return best.decode_contents()


def _by_body(soup: BeautifulSoup) -> Optional[str]:
    logger.info("Using full body content as fallback")
    body = soup.body or soup
    return body.decode_contents()


STRATEGIES: List[Callable[[BeautifulSoup], Optional[str]]] = [
    _by_recipe_selectors,
    _by_main_content,
    _by_keyword_score,
    _by_body,
]


def select_recipe_html(soup: BeautifulSoup) -> Optional[str]:
    """Inner HTML of the first strategy's candidate that is long enough."""
    for strategy in STRATEGIES:
        content = strategy(soup)
        if content and len(content) >= MIN_CANDIDATE_HTML_LENGTH:
            return content
    return None


def reduce_html_to_text(soup: Optional[BeautifulSoup]) -> str:
    """Strip boilerplate, pick the likeliest recipe sub-tree and return its text.

    The soup is modified in place. Returns NO_CONTENT_AVAILABLE when there is
    no document and NO_RECIPE_CONTENT when nothing substantial survives.
    """
    if soup is None:
        return NO_CONTENT_AVAILABLE

    strip_boilerplate(soup)
    content = select_recipe_html(soup)
    if content is None:
        logger.info("No substantial content found")
        return NO_RECIPE_CONTENT

    candidate = BeautifulSoup(content, "lxml")
    strip_boilerplate(candidate, CANDIDATE_BOILERPLATE_SELECTORS)
    text = candidate.get_text(" ")
    text = re.sub(r"\s+", " ", text)
    text = text.strip()
    if not text:
        return NO_RECIPE_CONTENT

    logger.info("Extracted content length: %d characters", len(text))
    return text
