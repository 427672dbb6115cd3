"""
Integration tests for Centroid Router.

Test components together or against real external services:
- API endpoints (FastAPI TestClient with the fake provider)
- Build -> JSON file -> classify flow
- Redis centroid store (real Redis, marked with @pytest.mark.integration)
"""
