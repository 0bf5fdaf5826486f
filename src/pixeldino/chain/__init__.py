"""Mint and leaderboard server integration."""

from .client import (
    ChainApiClient,
    LeaderEntry,
    LeaderboardResult,
    MetadataResult,
    MintResult,
    normalize_ipfs_uri,
)
from .service import ChainService

__all__ = [
    "ChainApiClient",
    "ChainService",
    "LeaderEntry",
    "LeaderboardResult",
    "MetadataResult",
    "MintResult",
    "normalize_ipfs_uri",
]
