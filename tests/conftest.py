import logging
from typing import Iterator

import pytest


@pytest.fixture(autouse=True)
def _propagate_package_logs() -> Iterator[None]:
    """Let caplog see records from the package namespace logger."""
    package_logger = logging.getLogger("highlighted_text")
    previous = package_logger.propagate
    package_logger.propagate = True
    yield
    package_logger.propagate = previous
