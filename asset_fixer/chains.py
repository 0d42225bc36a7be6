"""Per-chain metadata: registry, token types and explorer URL templates."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from .config import CRONOS_CHAIN_ID, CRYPTOORG_CHAIN_ID
from .errors import UnknownAssetTypeError, URLResolutionError
from .models import ChainDescriptor

BITCOIN = ChainDescriptor(0, "bitcoin", "Bitcoin")
ETHEREUM = ChainDescriptor(60, "ethereum", "Ethereum", is_evm=True)
CLASSIC = ChainDescriptor(61, "classic", "Ethereum Classic", is_evm=True)
COSMOS = ChainDescriptor(118, "cosmos", "Cosmos")
POA = ChainDescriptor(178, "poa", "POA Network", is_evm=True)
TRON = ChainDescriptor(195, "tron", "Tron")
CRYPTOORG = ChainDescriptor(CRYPTOORG_CHAIN_ID, "cryptoorg", "Crypto.org")
SOLANA = ChainDescriptor(501, "solana", "Solana")
BINANCE = ChainDescriptor(714, "binance", "BNB Beacon Chain")
CALLISTO = ChainDescriptor(820, "callisto", "Callisto", is_evm=True)
TOMOCHAIN = ChainDescriptor(889, "tomochain", "TomoChain", is_evm=True)
POLYGON = ChainDescriptor(966, "polygon", "Polygon", is_evm=True)
THUNDERTOKEN = ChainDescriptor(1001, "thundertoken", "ThunderCore", is_evm=True)
GOCHAIN = ChainDescriptor(6060, "gochain", "GoChain", is_evm=True)
WANCHAIN = ChainDescriptor(5718350, "wanchain", "Wanchain", is_evm=True)
CRONOS = ChainDescriptor(CRONOS_CHAIN_ID, "cronos", "Cronos", is_evm=True)
OPTIMISM = ChainDescriptor(10000070, "optimism", "Optimism", is_evm=True)
XDAI = ChainDescriptor(10000100, "xdai", "Gnosis Chain", is_evm=True)
FANTOM = ChainDescriptor(10000250, "fantom", "Fantom", is_evm=True)
HECO = ChainDescriptor(10000553, "heco", "Huobi ECO Chain", is_evm=True)
AVALANCHEC = ChainDescriptor(10009000, "avalanchec", "Avalanche C-Chain", is_evm=True)
SMARTCHAIN = ChainDescriptor(20000714, "smartchain", "BNB Smart Chain", is_evm=True)
ARBITRUM = ChainDescriptor(10042221, "arbitrum", "Arbitrum", is_evm=True)

CHAINS: Tuple[ChainDescriptor, ...] = (
    BITCOIN,
    ETHEREUM,
    CLASSIC,
    COSMOS,
    POA,
    TRON,
    CRYPTOORG,
    SOLANA,
    BINANCE,
    CALLISTO,
    TOMOCHAIN,
    POLYGON,
    THUNDERTOKEN,
    GOCHAIN,
    WANCHAIN,
    CRONOS,
    OPTIMISM,
    XDAI,
    FANTOM,
    HECO,
    AVALANCHEC,
    SMARTCHAIN,
    ARBITRUM,
)

_BY_ID: Dict[int, ChainDescriptor] = {chain.id: chain for chain in CHAINS}
_BY_HANDLE: Dict[str, ChainDescriptor] = {chain.handle: chain for chain in CHAINS}

COIN_TYPE = "coin"

EVM_TOKEN_TYPES: Dict[int, str] = {
    ETHEREUM.id: "ERC20",
    CLASSIC.id: "ETC20",
    POA.id: "POA20",
    CALLISTO.id: "CLO20",
    TOMOCHAIN.id: "TRC21",
    POLYGON.id: "POLYGON",
    THUNDERTOKEN.id: "TT20",
    GOCHAIN.id: "GO20",
    WANCHAIN.id: "WAN20",
    CRONOS.id: "CRC20",
    OPTIMISM.id: "OPTIMISM",
    XDAI.id: "XDAI",
    FANTOM.id: "FANTOM",
    HECO.id: "HRC20",
    AVALANCHEC.id: "AVALANCHE",
    SMARTCHAIN.id: "BEP20",
    ARBITRUM.id: "ARBITRUM",
}

NATIVE_TOKEN_TYPES: Dict[int, str] = {
    COSMOS.id: "COSMOS",
    CRYPTOORG.id: "CRYPTOORG",
    SOLANA.id: "SPL",
    BINANCE.id: "BEP2",
}

TRON_TOKEN_TYPES = ("TRC10", "TRC20")

_CHAIN_BY_TOKEN_TYPE: Dict[str, ChainDescriptor] = {
    token_type: _BY_ID[chain_id]
    for chain_id, token_type in {**EVM_TOKEN_TYPES, **NATIVE_TOKEN_TYPES}.items()
}
_CHAIN_BY_TOKEN_TYPE.update({token_type: TRON for token_type in TRON_TOKEN_TYPES})

# Templates are keyed by chain id, then by token type; "*" matches any type.
# Every chain listed here needs a token type that parses back to it.
EXPLORER_TEMPLATES: Dict[int, Dict[str, str]] = {
    ETHEREUM.id: {"*": "https://etherscan.io/token/{asset}"},
    CLASSIC.id: {"*": "https://blockscout.com/etc/mainnet/tokens/{asset}"},
    COSMOS.id: {"*": "https://www.mintscan.io/cosmos/assets/{asset}"},
    POA.id: {"*": "https://blockscout.com/poa/core/tokens/{asset}"},
    TRON.id: {
        "TRC10": "https://tronscan.io/#/token/{asset}",
        "*": "https://tronscan.io/#/token20/{asset}",
    },
    CRYPTOORG.id: {"*": "https://crypto.org/explorer/account/{asset}"},
    SOLANA.id: {"*": "https://solscan.io/token/{asset}"},
    BINANCE.id: {"*": "https://explorer.binance.org/asset/{asset}"},
    CALLISTO.id: {"*": "https://explorer.callisto.network/tokens/{asset}"},
    TOMOCHAIN.id: {"*": "https://tomoscan.io/token/{asset}"},
    POLYGON.id: {"*": "https://polygonscan.com/token/{asset}"},
    THUNDERTOKEN.id: {"*": "https://viewblock.io/thundercore/address/{asset}"},
    GOCHAIN.id: {"*": "https://explorer.gochain.io/addr/{asset}"},
    WANCHAIN.id: {"*": "https://www.wanscan.org/token/{asset}"},
    CRONOS.id: {"*": "https://cronoscan.com/token/{asset}"},
    OPTIMISM.id: {"*": "https://optimistic.etherscan.io/token/{asset}"},
    XDAI.id: {"*": "https://blockscout.com/xdai/mainnet/tokens/{asset}"},
    FANTOM.id: {"*": "https://ftmscan.com/token/{asset}"},
    HECO.id: {"*": "https://hecoinfo.com/token/{asset}"},
    AVALANCHEC.id: {"*": "https://snowtrace.io/token/{asset}"},
    SMARTCHAIN.id: {"*": "https://bscscan.com/token/{asset}"},
    ARBITRUM.id: {"*": "https://arbiscan.io/token/{asset}"},
}


def get_chain(chain_id: int) -> Optional[ChainDescriptor]:
    return _BY_ID.get(chain_id)


def get_chain_by_handle(handle: str) -> Optional[ChainDescriptor]:
    return _BY_HANDLE.get(handle)


def resolve_handles(handles: Iterable[str]) -> List[ChainDescriptor]:
    """Map chain handles to descriptors, rejecting unknown handles."""
    resolved: List[ChainDescriptor] = []
    for handle in handles:
        chain = get_chain_by_handle(handle)
        if chain is None:
            raise ValueError(f"Unknown chain handle: {handle}")
        resolved.append(chain)
    return resolved


def is_evm(chain_id: int) -> bool:
    chain = _BY_ID.get(chain_id)
    return bool(chain and chain.is_evm)


def get_token_type(chain_id: int, asset: str) -> Tuple[str, bool]:
    """Return the expected token type for an asset and whether one is registered."""
    if is_evm(chain_id):
        token_type = EVM_TOKEN_TYPES.get(chain_id)
        return (token_type, True) if token_type else ("", False)
    if chain_id == TRON.id:
        # Numeric identifiers are TRC10 tokens, contract addresses are TRC20.
        return ("TRC10", True) if asset.isdigit() else ("TRC20", True)
    token_type = NATIVE_TOKEN_TYPES.get(chain_id)
    return (token_type, True) if token_type else ("", False)


def parse_chain_from_type(asset_type: str) -> ChainDescriptor:
    """Return the chain an asset type string belongs to.

    Matching is exact: ``"erc20"`` is not a known type.
    """
    chain = _CHAIN_BY_TOKEN_TYPE.get(asset_type)
    if chain is None:
        raise UnknownAssetTypeError(asset_type)
    return chain


def chain_from_type_or_none(asset_type: str) -> Optional[ChainDescriptor]:
    """Parse an asset type, treating an unknown or empty type as no chain."""
    try:
        return parse_chain_from_type(asset_type)
    except UnknownAssetTypeError:
        return None


def get_explorer_url(chain: ChainDescriptor, asset: str, asset_type: str) -> str:
    templates = EXPLORER_TEMPLATES.get(chain.id)
    if not templates:
        raise URLResolutionError(
            "resolve explorer url", None, f"no explorer for chain {chain.handle}"
        )
    template = templates.get(asset_type.upper(), templates.get("*"))
    if template is None:
        raise URLResolutionError(
            "resolve explorer url",
            None,
            f"no explorer for chain {chain.handle} and type {asset_type!r}",
        )
    return template.format(asset=asset)
