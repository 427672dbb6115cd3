"""
Test fixtures for Centroid Router.

- emails.json: Labeled training examples whose fake embeddings are
  defined in tests/conftest.py
"""
