"""
Unit tests for the GCM sender.

Test individual components in isolation:
- Models (serialization, response decoding, delivery variants)
- Retry classifier and backoff policy
- Single-target and multicast retry engines (mock transport)
- Reconciliation of multicast outcomes
- HTTP transport (httpx.MockTransport)
- Request validation
"""
