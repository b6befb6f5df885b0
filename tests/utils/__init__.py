# tests/utils/__init__.py

from .constants import DEFAULT_TEST_LOG_LEVEL
from .patch_everywhere import patch_everywhere
from .rcfiles import FakeTerminal, FixedLayout, make_processor, write_rc


__all__ = [  # noqa: RUF022
    # constants
    "DEFAULT_TEST_LOG_LEVEL",
    # patch_everywhere
    "patch_everywhere",
    # rcfiles
    "FakeTerminal",
    "FixedLayout",
    "make_processor",
    "write_rc",
]
