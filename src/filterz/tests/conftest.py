import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _silence_loguru():
    """每个测试后恢复库的默认静默状态"""
    yield
    logger.remove()
    logger.disable("filterz")
