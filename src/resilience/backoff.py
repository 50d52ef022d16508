"""
Exponential backoff schedule for retry loops.

Used by the rate-limit retry policies of the HTTP and LLM clients.
"""


def exponential_delay(
    attempt: int,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    multiplier: float = 2.0,
) -> float:
    """
    Deterministic exponential delay for a 0-indexed attempt.

    Formula: min(base_delay * multiplier^attempt, max_delay)

    With the defaults this yields 1s, 2s, 4s, ... capped at 30s, which is
    the schedule the LLM provider's rate limiter expects.
    """
    return min(base_delay * (multiplier ** attempt), max_delay)
