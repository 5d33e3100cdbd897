"""Core configuration and infrastructure helpers.

Exports configuration settings so tests can use
`from receipt_rewards.core import settings`.
"""

from .config import settings  # noqa: F401
