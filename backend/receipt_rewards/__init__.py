"""Top-level application package for the receipt rewards API.

The service accepts purchase receipts, scores them against a fixed set
of rewards rules and keeps the resulting points in a store so they can
be looked up later by the identifier handed back to the caller.

To run the API locally you can execute:

```bash
uvicorn receipt_rewards.api.main:app --reload --port 8080
```

or use the ``receipt-rewards`` console script. Configuration values can
be overridden with environment variables or a ``.env`` file at the
project root.
"""

__all__: list[str] = []
