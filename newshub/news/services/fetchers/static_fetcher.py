import httpx
import structlog
from typing import Optional

logger = structlog.get_logger(__name__)

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,image/apng,*/*;q=0.8"


class StaticPageFetcher:
    """Plain HTTP GET of a page; None on any failure, no inline retries"""

    def __init__(self, user_agent: str, timeout_seconds: float = 30.0):
        self.user_agent = user_agent
        self.timeout_seconds = timeout_seconds

    async def fetch_markup(self, url: str, source_id: Optional[str] = None) -> Optional[str]:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": HTML_ACCEPT,
            "Accept-Language": "en-US,en;q=0.9,kn;q=0.8,hi;q=0.8",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, follow_redirects=True) as client:
                response = await client.get(url, headers=headers)
                response.raise_for_status()
                return response.text
        except httpx.TimeoutException:
            logger.warning("static_fetch_timed_out", source_id=source_id, url=url, status="timeout")
        except httpx.HTTPStatusError as e:
            logger.warning("static_fetch_failed", source_id=source_id, url=url, status=e.response.status_code)
        except httpx.HTTPError as e:
            logger.warning("static_fetch_failed", source_id=source_id, url=url, status="network_error", error=str(e))
        return None
