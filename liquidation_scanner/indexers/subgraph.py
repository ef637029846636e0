"""GraphQL indexer client for lending positions."""
from __future__ import annotations

import json
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import GraphQLConfig
from ..errors import DeserializationError, FetchError
from ..models import Position
from ..protocols.artha.parser import parse_position

logger = logging.getLogger(__name__)

POSITIONS_QUERY = """{
    positions(first: %d) {
        account { id }
        pool {
            utilizationRate
            transactionHash
            totalSupplyShares
            totalSupplyAssets
            totalBorrowShares
            totalBorrowAssets
            oracle
            ltv
            lth
            loanToken { id, loanToken }
            loanAddress
            lendingRate
            irm
            id
            curator { id }
            collateralToken { collateralToken, id }
            collateralAddress
            borrowRate
        }
        token { id, tokenId }
        tokenId
        bidder
        borrowShares
        id
    }
}"""


class SubgraphClient:
    """Fetch the first page of positions from the lending subgraph."""

    def __init__(self, config: GraphQLConfig) -> None:
        self.url = config.url
        self.token = config.token
        self.page_size = config.page_size
        self.timeout = config.timeout

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _post(self, query: str) -> dict[str, Any]:
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.post(
                self.url,
                json={"query": query},
                headers=self._headers(),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if not 200 <= response.status < 300:
                    raise FetchError(
                        f"GraphQL request failed with status {response.status}",
                        status=response.status,
                    )
                try:
                    return await response.json(content_type=None)
                except (json.JSONDecodeError, aiohttp.ContentTypeError) as e:
                    raise DeserializationError(f"GraphQL response is not JSON: {e}") from e

    async def fetch_positions(self) -> list[Position]:
        """Return up to ``page_size`` positions; later pages are not requested."""
        try:
            payload = await self._post(POSITIONS_QUERY % self.page_size)
        except Exception as e:
            logger.error("Error fetching GraphQL positions: %s", e)
            raise

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict) or not isinstance(data.get("positions"), list):
            errors = payload.get("errors") if isinstance(payload, dict) else None
            detail = "missing data.positions"
            if isinstance(errors, list) and errors:
                first = errors[0]
                detail = first.get("message", str(first)) if isinstance(first, dict) else str(first)
            logger.error("Error fetching GraphQL positions: %s", detail)
            raise DeserializationError(f"Unexpected GraphQL response: {detail}")

        positions = [parse_position(raw) for raw in data["positions"]]
        logger.info("Fetched %d positions from subgraph", len(positions))
        return positions
