from typing import List

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _quiet_loguru():
    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def log_messages() -> List[str]:
    messages: List[str] = []
    logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    return messages
