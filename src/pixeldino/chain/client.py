"""HTTP client for the mint and leaderboard server.

Endpoints:
    GET  /api/mint-nft/{account_id}  -> {"serial": "..."}
    GET  /leader                     -> [{"name", "score", "accountId"}, ...]
    POST /score {accountId, score}   -> {"success", "madeLeaderboard", "leaders"}

Every call returns a result dataclass; network failures never raise.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import aiohttp

logger = logging.getLogger(__name__)

IPFS_GATEWAY = "https://ipfs.io/ipfs/"


def normalize_ipfs_uri(uri: str | None) -> str | None:
    """Rewrite ``ipfs://`` URIs to an HTTP gateway URL."""
    if not uri:
        return None
    if uri.startswith("ipfs://"):
        path = uri[len("ipfs://"):]
        if path.startswith("ipfs/"):
            path = path[len("ipfs/"):]
        return IPFS_GATEWAY + path
    return uri


@dataclass
class MintResult:
    """Result of a mint request."""
    success: bool
    serial: str | None = None
    error: str | None = None


@dataclass
class LeaderEntry:
    """One leaderboard row."""
    name: str
    score: int
    account_id: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "LeaderEntry":
        account_id = str(data.get("accountId", ""))
        return cls(
            name=str(data.get("name") or account_id),
            score=int(data.get("score", 0)),
            account_id=account_id,
        )


@dataclass
class LeaderboardResult:
    """Result of a leaderboard query or score submission."""
    success: bool
    leaders: list[LeaderEntry] = field(default_factory=list)
    made_leaderboard: bool = False
    error: str | None = None


@dataclass
class MetadataResult:
    """Result of an NFT metadata fetch."""
    success: bool
    metadata: dict[str, Any] = field(default_factory=dict)
    error: str | None = None


class ChainApiClient:
    """Async client for the game server."""

    DEFAULT_API_URL = "http://localhost:3000"

    def __init__(self, api_url: str | None = None, timeout: float = 30.0):
        """Initialize the client.

        Args:
            api_url: Base URL of the game server
            timeout: Total timeout per request in seconds
        """
        self._api_url = (api_url or self.DEFAULT_API_URL).rstrip("/")
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def timeout(self) -> float:
        return self._timeout

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers={"Content-Type": "application/json"},
            )
        return self._session

    async def mint_nft(self, account_id: str) -> MintResult:
        """Ask the server to mint and transfer a reward NFT to ``account_id``."""
        try:
            session = await self._get_session()
            url = f"{self._api_url}/api/mint-nft/{account_id}"

            async with session.get(url) as response:
                data = await response.json()

                if response.status == 200 and data.get("serial") is not None:
                    logger.info(f"NFT minted for {account_id}: serial {data['serial']}")
                    return MintResult(success=True, serial=str(data["serial"]))

                error = data.get("error", f"HTTP {response.status}")
                logger.error(f"Failed to mint NFT: {error}")
                return MintResult(success=False, error=error)

        except asyncio.TimeoutError:
            logger.error("Timeout minting NFT")
            return MintResult(success=False, error="TIMEOUT")
        except aiohttp.ClientError as e:
            logger.error(f"Network error minting NFT: {e}")
            return MintResult(success=False, error="NETWORK_ERROR")
        except Exception as e:
            logger.exception(f"Unexpected error minting NFT: {e}")
            return MintResult(success=False, error=str(e))

    async def get_leaders(self) -> LeaderboardResult:
        """Fetch the current leaderboard."""
        try:
            session = await self._get_session()

            async with session.get(f"{self._api_url}/leader") as response:
                data = await response.json()

                if response.status == 200 and isinstance(data, list):
                    return LeaderboardResult(
                        success=True,
                        leaders=[LeaderEntry.from_json(item) for item in data],
                    )

                error = data.get("error", f"HTTP {response.status}") if isinstance(data, dict) else f"HTTP {response.status}"
                logger.error(f"Failed to load leaderboard: {error}")
                return LeaderboardResult(success=False, error=error)

        except asyncio.TimeoutError:
            logger.error("Timeout loading leaderboard")
            return LeaderboardResult(success=False, error="TIMEOUT")
        except aiohttp.ClientError as e:
            logger.error(f"Network error loading leaderboard: {e}")
            return LeaderboardResult(success=False, error="NETWORK_ERROR")
        except Exception as e:
            logger.exception(f"Unexpected error loading leaderboard: {e}")
            return LeaderboardResult(success=False, error=str(e))

    async def submit_score(self, account_id: str, score: int) -> LeaderboardResult:
        """Submit a finished run's score."""
        if not account_id:
            return LeaderboardResult(success=False, error="accountId is required")
        if score < 0:
            return LeaderboardResult(success=False, error="Valid score is required")

        try:
            session = await self._get_session()
            payload = {"accountId": account_id, "score": int(score)}

            async with session.post(f"{self._api_url}/score", json=payload) as response:
                data = await response.json()

                if response.status == 200 and data.get("success"):
                    result = LeaderboardResult(
                        success=True,
                        leaders=[LeaderEntry.from_json(item) for item in data.get("leaders", [])],
                        made_leaderboard=bool(data.get("madeLeaderboard")),
                    )
                    logger.info(
                        f"Score {score} submitted for {account_id} "
                        f"(leaderboard: {result.made_leaderboard})"
                    )
                    return result

                error = data.get("error", f"HTTP {response.status}")
                logger.error(f"Failed to submit score: {error}")
                return LeaderboardResult(success=False, error=error)

        except asyncio.TimeoutError:
            logger.error("Timeout submitting score")
            return LeaderboardResult(success=False, error="TIMEOUT")
        except aiohttp.ClientError as e:
            logger.error(f"Network error submitting score: {e}")
            return LeaderboardResult(success=False, error="NETWORK_ERROR")
        except Exception as e:
            logger.exception(f"Unexpected error submitting score: {e}")
            return LeaderboardResult(success=False, error=str(e))

    async def fetch_metadata(self, uri: str) -> MetadataResult:
        """Download NFT metadata JSON, resolving ``ipfs://`` URIs."""
        url = normalize_ipfs_uri(uri)
        if url is None:
            return MetadataResult(success=False, error="EMPTY_URI")

        try:
            session = await self._get_session()

            async with session.get(url) as response:
                if response.status != 200:
                    logger.error(f"Failed to fetch metadata {url}: HTTP {response.status}")
                    return MetadataResult(success=False, error=f"HTTP {response.status}")
                data = await response.json(content_type=None)
                if not isinstance(data, dict):
                    return MetadataResult(success=False, error="INVALID_METADATA")
                return MetadataResult(success=True, metadata=data)

        except asyncio.TimeoutError:
            logger.error("Timeout fetching metadata")
            return MetadataResult(success=False, error="TIMEOUT")
        except aiohttp.ClientError as e:
            logger.error(f"Network error fetching metadata: {e}")
            return MetadataResult(success=False, error="NETWORK_ERROR")
        except Exception as e:
            logger.exception(f"Unexpected error fetching metadata: {e}")
            return MetadataResult(success=False, error=str(e))

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
