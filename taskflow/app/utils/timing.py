from __future__ import annotations

import time
from typing import Optional


def elapsed_ms(start_time: float) -> int:
    return int((time.perf_counter() - start_time) * 1000)


def log_action_timing(
    logger,
    *,
    action: str,
    outcome: str,
    start_time: float,
    task_id: Optional[str] = None,
) -> None:
    logger.info(
        "action_timing",
        extra={
            "task": task_id or "-",
            "action": action,
            "outcome": outcome,
            "elapsed_ms": elapsed_ms(start_time),
        },
    )
