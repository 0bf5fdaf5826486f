"""Fire-and-forget chain calls for the game loop.

The engine calls ``request_mint`` and ``report_score`` from inside a frame
step, so neither may block. When an asyncio loop is running the request is
scheduled as a task on it; otherwise it runs in a daemon thread with its own
loop and its own HTTP client. Results are handed to optional callbacks,
which must only touch UI state.
"""

import asyncio
import logging
import threading
from typing import Any, Awaitable, Callable

from pixeldino.chain.client import ChainApiClient, LeaderboardResult, MintResult
from pixeldino.config.settings import ChainSettings
from pixeldino.game.collaborators import Minter, ScoreReporter

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], ChainApiClient]


class ChainService(Minter, ScoreReporter):
    """
    Mints rewards and reports scores for one player account.

    Usage:
        service = ChainService(settings.chain, on_mint=show_banner)
        service.request_mint(120)  # returns immediately
    """

    def __init__(
        self,
        settings: ChainSettings,
        client_factory: ClientFactory | None = None,
        on_mint: Callable[[MintResult], None] | None = None,
        on_report: Callable[[LeaderboardResult], None] | None = None,
    ):
        self._settings = settings
        self._client_factory = client_factory or (
            lambda: ChainApiClient(settings.api_url, timeout=settings.timeout)
        )
        self._on_mint = on_mint
        self._on_report = on_report
        self._client: ChainApiClient | None = None
        self._tasks: set[asyncio.Task] = set()
        self._threads: list[threading.Thread] = []

    @property
    def account_id(self) -> str:
        return self._settings.account_id

    @property
    def enabled(self) -> bool:
        return bool(self._settings.account_id)

    @property
    def in_flight(self) -> int:
        """Number of requests that have not finished yet."""
        self._threads = [t for t in self._threads if t.is_alive()]
        return len(self._tasks) + len(self._threads)

    def request_mint(self, score: int) -> None:
        if not self.enabled:
            logger.info(f"Skipping mint for score {score}: no account configured")
            return

        logger.info(f"Requesting reward mint for high score {score}")
        self._dispatch(
            "mint",
            lambda client: client.mint_nft(self.account_id),
            self._on_mint,
        )

    def report_score(self, score: int) -> None:
        if not self.enabled:
            logger.debug(f"Skipping score report for {score}: no account configured")
            return

        self._dispatch(
            "score report",
            lambda client: client.submit_score(self.account_id, score),
            self._on_report,
        )

    def request_leaders(self, callback: Callable[[LeaderboardResult], None]) -> None:
        """Fetch the leaderboard in the background."""
        self._dispatch("leaderboard", lambda client: client.get_leaders(), callback)

    def _dispatch(
        self,
        what: str,
        call: Callable[[ChainApiClient], Awaitable[Any]],
        callback: Callable[[Any], None] | None,
    ) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None:
            if self._client is None:
                self._client = self._client_factory()
            task = loop.create_task(self._run(what, call, callback, self._client))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            return

        def _worker() -> None:
            asyncio.run(self._run_isolated(what, call, callback))

        thread = threading.Thread(target=_worker, name=f"chain-{what}", daemon=True)
        self._threads.append(thread)
        thread.start()

    async def _run_isolated(
        self,
        what: str,
        call: Callable[[ChainApiClient], Awaitable[Any]],
        callback: Callable[[Any], None] | None,
    ) -> None:
        client = self._client_factory()
        try:
            await self._run(what, call, callback, client)
        finally:
            await client.close()

    async def _run(
        self,
        what: str,
        call: Callable[[ChainApiClient], Awaitable[Any]],
        callback: Callable[[Any], None] | None,
        client: ChainApiClient,
    ) -> None:
        try:
            result = await call(client)
        except Exception as e:
            logger.exception(f"Chain {what} failed: {e}")
            return

        if callback is not None:
            try:
                callback(result)
            except Exception as e:
                logger.error(f"Chain {what} callback failed: {e}")

    def wait(self, timeout: float = 30.0) -> None:
        """Join background threads. Only meaningful without a running loop."""
        for thread in list(self._threads):
            thread.join(timeout)
        self._threads = [t for t in self._threads if t.is_alive()]

    async def close(self) -> None:
        """Wait for scheduled tasks and close the shared client."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        if self._client is not None:
            await self._client.close()
            self._client = None
