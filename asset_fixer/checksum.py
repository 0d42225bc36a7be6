"""Address checksum validation for EVM chains."""

from __future__ import annotations

from typing import Optional

from eth_utils import is_checksum_address, is_hex_address, to_checksum_address

from .errors import ChecksumComputeError
from .models import ChainDescriptor


def validate_address_checksum(chain: ChainDescriptor, candidate: str) -> Optional[str]:
    """Return a description of what is wrong with ``candidate``, or ``None`` if it is valid.

    Every EVM chain in the registry uses EIP-55 casing.
    """
    if not candidate.startswith("0x"):
        return f"address {candidate} for {chain.handle} must start with 0x"
    if not is_hex_address(candidate):
        return f"address {candidate} for {chain.handle} is not a 20-byte hex address"
    if not is_checksum_address(candidate):
        return f"address {candidate} for {chain.handle} is not in checksum form"
    return None


def compute_checksum(candidate: str) -> str:
    """Return the EIP-55 form of a hex address."""
    try:
        return to_checksum_address(candidate)
    except (ValueError, TypeError) as exc:
        raise ChecksumComputeError("compute checksum", None, f"{candidate}: {exc}") from exc
