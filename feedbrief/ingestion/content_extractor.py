"""Article fetcher and main-content text extractor."""

import logging
import re
from typing import List, Optional

import httpx
from bs4 import BeautifulSoup

from ..config.models import DEFAULT_USER_AGENT
from ..exceptions import ExtractionError
from .models import ExtractedContent, ExtractionStatus

logger = logging.getLogger(__name__)

NON_CONTENT_TAGS = [
    "script", "style", "meta", "link", "noscript", "iframe",
    "form", "header", "footer", "nav", "aside",
]

# Likely main-content containers, most specific first
CONTENT_SELECTORS = [
    "article",
    '[role="main"]',
    "main",
    ".article-content",
    ".story-content",
    ".main-content",
    ".post-content",
    "#content-body",
    ".content",
    ".entry-content",
    ".story-body",
    "#article-body",
]

CONTAINER_PARAGRAPH_MIN_CHARS = 20
DOCUMENT_PARAGRAPH_MIN_CHARS = 30
CONTAINER_TEXT_MIN_CHARS = 200
ACCEPT_TEXT_MIN_CHARS = 150
BODY_TEXT_MIN_CHARS = 200

_WHITESPACE_RE = re.compile(r"\s+")


def insufficient_content_sentinel(url: str) -> str:
    return f"Could not extract meaningful content from {url}."


def error_sentinel(reason: str) -> str:
    return f"Error extracting content: {reason}"


def html_to_text(raw_html: Optional[str]) -> str:
    """Visible text of an HTML fragment, whitespace-collapsed."""
    if not raw_html:
        return ""
    if "<" not in raw_html and "&" not in raw_html:
        return _WHITESPACE_RE.sub(" ", raw_html).strip()
    text = BeautifulSoup(raw_html, "html.parser").get_text(" ")
    return _WHITESPACE_RE.sub(" ", text).strip()


def _paragraph_texts(paragraphs, min_chars: int) -> List[str]:
    texts = []
    seen = set()
    for p in paragraphs:
        if id(p) in seen:
            continue
        seen.add(id(p))
        text = p.get_text().strip()
        if len(text) > min_chars:
            texts.append(text)
    return texts


class ContentExtractor:
    """Fetch article HTML and extract its main text through a cascade of heuristics."""

    def __init__(
        self,
        timeout: float = 15.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize content extractor."""
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    def _failure(self, url: str, reason: str) -> ExtractedContent:
        logger.error("Error extracting content from %s: %s", url, reason)
        return ExtractedContent(
            url=url,
            text=error_sentinel(reason),
            status=ExtractionStatus.ERROR,
            error=reason,
        )

    def extract_text(self, html: str, url: str) -> ExtractedContent:
        """Run the extraction cascade over an HTML document."""
        try:
            return ExtractedContent(url=url, text=self._cascade(html))
        except ExtractionError as e:
            logger.warning("No meaningful content extracted from %s: %s", url, e)
            return ExtractedContent(
                url=url,
                text=insufficient_content_sentinel(url),
                status=ExtractionStatus.INSUFFICIENT,
                error=str(e),
            )

    @staticmethod
    def _cascade(html: str) -> str:
        soup = BeautifulSoup(html or "", "html.parser")
        for element in soup(NON_CONTENT_TAGS):
            element.decompose()

        content = ""

        # Tier 1: paragraphs inside the first matching content container
        for selector in CONTENT_SELECTORS:
            containers = soup.select(selector)
            if containers:
                paragraphs = [p for container in containers for p in container.find_all("p")]
                content = "\n\n".join(_paragraph_texts(paragraphs, CONTAINER_PARAGRAPH_MIN_CHARS))
                break

        # Tier 2: significant paragraphs anywhere in the document
        if len(content) < CONTAINER_TEXT_MIN_CHARS:
            significant = _paragraph_texts(soup.find_all("p"), DOCUMENT_PARAGRAPH_MIN_CHARS)
            if significant:
                content = "\n\n".join(significant)

        if len(content) > ACCEPT_TEXT_MIN_CHARS:
            return content

        # Tier 3: all visible text
        root = soup.body or soup
        body_text = _WHITESPACE_RE.sub(" ", root.get_text(" ")).strip()
        if len(body_text) > BODY_TEXT_MIN_CHARS:
            return body_text

        raise ExtractionError(f"Insufficient content ({len(body_text)} characters of visible text)")

    async def extract(self, url: str) -> ExtractedContent:
        """Fetch a single article and extract its text. Never raises."""
        logger.info("Extracting content from: %s", url)
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers=headers,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()

            return self.extract_text(response.text, url)

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            error_msg = f"HTTP {status_code}"
            if status_code == 404:
                error_msg = "Article not found (404)"
            elif status_code == 403:
                error_msg = "Access forbidden (403)"
            elif status_code >= 500:
                error_msg = f"Server error ({status_code})"
            return self._failure(url, error_msg)
        except httpx.TimeoutException:
            return self._failure(url, "Request timed out")
        except Exception as e:
            return self._failure(url, str(e) or e.__class__.__name__)
