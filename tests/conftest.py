import logging

import pytest


@pytest.fixture(autouse=True)
def reset_termcfg_logger():
    """CLI tests install a rich handler; give every test a clean logger."""
    yield
    logger = logging.getLogger("termcfg")
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
