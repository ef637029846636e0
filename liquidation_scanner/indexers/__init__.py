from .nft_proxy import NftProxyClient
from .subgraph import SubgraphClient

__all__ = ["NftProxyClient", "SubgraphClient"]
