"""
# Named counters for lightweight instrumentation.

Each module grabs its own counter via `counter = COUNTERS[__name__]` and bumps
named events, e.g. `counter["step"] += 1`. Counters are process-wide and are
logged in bulk by `log_counters()`.
"""

import logging
from collections import Counter, defaultdict

logger = logging.getLogger(__name__)

COUNTERS: defaultdict[str, Counter[str]] = defaultdict(Counter)


def log_counters(level: int = logging.INFO) -> None:
    """Log all nonzero counters, grouped by module."""
    lines: list[str] = []
    for name, counter in sorted(COUNTERS.items()):
        for key, value in sorted(counter.items()):
            if value:
                lines.append(f"{name}.{key} = {value}")
    if lines:
        logger.log(level, "Counters:\n" + "\n".join(lines))


def reset_counters() -> None:
    """Zero all counters, keeping per-module Counter objects alive."""
    for counter in COUNTERS.values():
        counter.clear()
