import pytest


@pytest.fixture
def recorded_sleeps():
	return []


@pytest.fixture
def fake_sleep(recorded_sleeps):
	async def sleep(seconds):
		recorded_sleeps.append(seconds)

	return sleep
