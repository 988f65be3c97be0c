"""Wall-clock source for the engine.

Every function that needs "now" takes it as a parameter; this is only the
fallback when the caller passes None. Patch ``studyflow.domain.clock.now_ms``
in tests to freeze time.
"""

import time


def now_ms() -> int:
    """Current time as integer epoch milliseconds."""
    return int(time.time() * 1000)
