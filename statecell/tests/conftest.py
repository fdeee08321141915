import logging

import pytest

from statecell.logging_config import HANDLER_NAME


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Drop handlers installed by setup_logging() so tests do not leak them."""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
    root.setLevel(level)
