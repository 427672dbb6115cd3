"""
Unit tests for Centroid Router.

Test individual components in isolation:
- Vector math, centroid builder, classifier (fake embedding provider)
- Routing service over the in-memory store
- Embedding providers (httpx.MockTransport)
- Centroid stores and training data loader
- CLI, Celery task, settings, logging
"""
