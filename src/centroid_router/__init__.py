"""
Centroid Router.

Routes free-form text (typically an e-mail body) to one of a fixed set of
labels by comparing its embedding with per-label centroid vectors:

- build: labeled examples -> embeddings -> normalized mean vector per label
- classify: text -> embedding -> cosine similarity ranking -> threshold decision

Architecture: FastAPI / CLI transport + pluggable embedding providers
(OpenAI, Ollama) + pluggable centroid stores (JSON file, Redis)
"""

__version__ = "0.1.0"
