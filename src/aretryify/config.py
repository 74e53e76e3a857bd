r"""Default values for retry policies.

These constants are used by ``RetryPolicy`` when a field is not
overridden at decoration time.
"""

from __future__ import annotations

__all__ = ["DEFAULT_MAX_RETRIES", "DEFAULT_RETRY_DELAY"]

# Maximum number of retries after the first attempt
# Total attempts = max_retries + 1
DEFAULT_MAX_RETRIES = 5

# Delay in seconds before each retry when no backoff strategy is given
DEFAULT_RETRY_DELAY = 0.5
