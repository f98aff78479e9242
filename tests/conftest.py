import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis
from httpx import ASGITransport, AsyncClient

from roomchat.core import state
from roomchat.main import app
from roomchat.services.kv_store import RedisKeyValueStore


START_MS = 1_700_000_000_000


class FakeClock:
	"""Millisecond clock that only moves when told to."""

	def __init__(self, start: int = START_MS) -> None:
		self.now = start

	def __call__(self) -> int:
		return self.now

	def advance(self, ms: int) -> int:
		self.now += ms
		return self.now


@pytest.fixture
def clock():
	return FakeClock()


@pytest_asyncio.fixture
async def redis_client():
	client = FakeRedis(decode_responses=True)
	try:
		yield client
	finally:
		await client.flushall()
		await client.aclose()


@pytest.fixture
def store(redis_client):
	return RedisKeyValueStore(client=redis_client)


@pytest_asyncio.fixture
async def api_client(store, clock):
	state.init_state(store, clock=clock)
	transport = ASGITransport(app=app)
	try:
		async with AsyncClient(transport=transport, base_url="http://testserver") as client:
			yield client
	finally:
		state.reset_state()
