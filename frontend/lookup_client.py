from typing import Optional

import httpx

from frontend.config import API_URL, LOOKUP_TIMEOUT
from frontend.utils import get_logger

logger = get_logger("lookup_client")


class LookupClientError(Exception):
    """Network, status or parse failure talking to the lookup API."""


class LookupClient:
    """Async client for POST /findSimilarPlace"""

    def __init__(
        self,
        base_url: str = API_URL,
        timeout: float = LOOKUP_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def find_similar_place(self, user_location: str) -> str:
        """Return the similar-place text for a location description.

        Raises:
            LookupClientError: on transport errors, non-2xx responses or a malformed body.
        """
        try:
            response = await self.client.post(
                f"{self.base_url}/findSimilarPlace",
                json={"userLocation": user_location},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise LookupClientError(f"Request failed: {e}") from e

        if response.is_error:
            raise LookupClientError(
                f"Lookup API answered {response.status_code}: {_message(response)}"
            )
        try:
            return str(response.json()["similarPlace"])
        except (ValueError, KeyError, TypeError) as e:
            raise LookupClientError(f"Malformed lookup response: {response.text[:200]}") from e

    async def aclose(self) -> None:
        await self.client.aclose()


def _message(response: httpx.Response) -> str:
    try:
        return response.json().get("message", response.text)
    except (ValueError, AttributeError):
        return response.text
