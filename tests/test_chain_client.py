import asyncio

import aiohttp
import pytest

from pixeldino.chain.client import ChainApiClient, LeaderEntry, normalize_ipfs_uri


class FakeResponse:
    def __init__(self, status=200, payload=None):
        self.status = status
        self._payload = payload

    async def json(self, **kwargs):
        return self._payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Records requests and replays canned responses or errors."""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.requests = []
        self.closed = False

    def _request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self._request("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._request("POST", url, **kwargs)

    async def close(self):
        self.closed = True


@pytest.fixture
def make_client(monkeypatch):
    def _make(response=None, error=None):
        client = ChainApiClient("http://game.test/", timeout=5)
        session = FakeSession(response, error)

        async def fake_get_session():
            return session

        monkeypatch.setattr(client, "_get_session", fake_get_session)
        return client, session

    return _make


class TestNormalizeIpfsUri:
    @pytest.mark.parametrize("uri,expected", [
        ("ipfs://Qm123/1.json", "https://ipfs.io/ipfs/Qm123/1.json"),
        ("ipfs://ipfs/Qm123", "https://ipfs.io/ipfs/Qm123"),
        ("https://example.com/meta.json", "https://example.com/meta.json"),
        ("", None),
        (None, None),
    ])
    def test_normalize(self, uri, expected):
        assert normalize_ipfs_uri(uri) == expected


def test_leader_entry_falls_back_to_account_id():
    entry = LeaderEntry.from_json({"accountId": "0.0.9", "score": "42"})
    assert entry.name == "0.0.9"
    assert entry.score == 42


def test_trailing_slash_stripped():
    assert ChainApiClient("http://game.test/").api_url == "http://game.test"
    assert ChainApiClient().api_url == ChainApiClient.DEFAULT_API_URL


class TestMint:
    async def test_success(self, make_client):
        client, session = make_client(FakeResponse(200, {"serial": 17}))
        result = await client.mint_nft("0.0.1234")

        assert result.success
        assert result.serial == "17"
        assert session.requests[0][:2] == ("GET", "http://game.test/api/mint-nft/0.0.1234")

    async def test_server_error(self, make_client):
        client, _ = make_client(FakeResponse(500, {"error": "treasury empty"}))
        result = await client.mint_nft("0.0.1234")
        assert not result.success
        assert result.error == "treasury empty"

    async def test_timeout(self, make_client):
        client, _ = make_client(error=asyncio.TimeoutError())
        result = await client.mint_nft("0.0.1234")
        assert result.error == "TIMEOUT"

    async def test_network_error(self, make_client):
        client, _ = make_client(error=aiohttp.ClientConnectionError("refused"))
        result = await client.mint_nft("0.0.1234")
        assert result.error == "NETWORK_ERROR"


class TestLeaders:
    async def test_list(self, make_client):
        payload = [
            {"name": "ana", "score": 300, "accountId": "0.0.1"},
            {"score": 200, "accountId": "0.0.2"},
        ]
        client, session = make_client(FakeResponse(200, payload))
        result = await client.get_leaders()

        assert result.success
        assert [e.name for e in result.leaders] == ["ana", "0.0.2"]
        assert session.requests[0][1] == "http://game.test/leader"

    async def test_unexpected_payload(self, make_client):
        client, _ = make_client(FakeResponse(200, {"error": "maintenance"}))
        result = await client.get_leaders()
        assert not result.success
        assert result.error == "maintenance"


class TestSubmitScore:
    async def test_success(self, make_client):
        payload = {
            "success": True,
            "madeLeaderboard": True,
            "leaders": [{"name": "me", "score": 150, "accountId": "0.0.1"}],
        }
        client, session = make_client(FakeResponse(200, payload))
        result = await client.submit_score("0.0.1", 150)

        assert result.success
        assert result.made_leaderboard
        assert result.leaders[0].score == 150
        method, url, kwargs = session.requests[0]
        assert (method, url) == ("POST", "http://game.test/score")
        assert kwargs["json"] == {"accountId": "0.0.1", "score": 150}

    @pytest.mark.parametrize("account,score", [("", 10), ("0.0.1", -1)])
    async def test_invalid_input_never_sent(self, make_client, account, score):
        client, session = make_client()
        result = await client.submit_score(account, score)
        assert not result.success
        assert session.requests == []


class TestMetadata:
    async def test_fetch_resolves_ipfs(self, make_client):
        client, session = make_client(FakeResponse(200, {"name": "Dino #1"}))
        result = await client.fetch_metadata("ipfs://Qm1")

        assert result.success
        assert result.metadata == {"name": "Dino #1"}
        assert session.requests[0][1] == "https://ipfs.io/ipfs/Qm1"

    async def test_empty_uri(self, make_client):
        client, session = make_client()
        result = await client.fetch_metadata("")
        assert result.error == "EMPTY_URI"
        assert session.requests == []

    async def test_http_error(self, make_client):
        client, _ = make_client(FakeResponse(404, None))
        result = await client.fetch_metadata("https://example.com/x.json")
        assert result.error == "HTTP 404"

    async def test_non_object_metadata(self, make_client):
        client, _ = make_client(FakeResponse(200, ["not", "a", "dict"]))
        result = await client.fetch_metadata("https://example.com/x.json")
        assert result.error == "INVALID_METADATA"


async def test_close_without_session():
    client = ChainApiClient()
    await client.close()
