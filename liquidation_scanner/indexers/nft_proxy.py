"""Client for the NFT metadata proxy endpoint."""
import json
import logging
import ssl

import aiohttp
import certifi

from ..config import NftConfig
from ..errors import DeserializationError, FetchError
from ..models import NftMetadata

logger = logging.getLogger(__name__)


class NftProxyClient:
    """Fetch NFTs held by the configured owner for one collection."""

    def __init__(self, config: NftConfig) -> None:
        self.base_url = config.base_url.rstrip("/")
        self.owner_address = config.owner_address
        self.contract_address = config.contract_address
        self.timeout = config.timeout

    async def fetch_owned_nfts(self) -> list[NftMetadata]:
        url = f"{self.base_url}/api/nft"
        params = {
            "ownerAddress": self.owner_address,
            "contractAddress": self.contract_address,
        }

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    url,
                    params=params,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if not 200 <= response.status < 300:
                        raise FetchError(
                            f"NFT data fetch failed with status {response.status}",
                            status=response.status,
                        )
                    try:
                        data = await response.json(content_type=None)
                    except (json.JSONDecodeError, aiohttp.ContentTypeError) as e:
                        raise DeserializationError(
                            f"NFT proxy response is not JSON: {e}"
                        ) from e
        except Exception as e:
            logger.error("Error fetching NFT data: %s", e)
            raise

        owned = data.get("ownedNfts") if isinstance(data, dict) else None
        if not isinstance(owned, list):
            logger.error("Error fetching NFT data: missing ownedNfts")
            raise DeserializationError("NFT proxy response missing ownedNfts")

        return [NftMetadata.from_dict(item) for item in owned]
