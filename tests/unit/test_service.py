"""
Unit tests for the routing service (build + classify over a store).
"""

import asyncio
import threading
from unittest.mock import MagicMock

import pytest

from centroid_router.core.exceptions import (
    CentroidsUnavailableError,
    EmptyInputError,
    InvalidRequestError,
)
from centroid_router.embeddings.openai_provider import OpenAIEmbeddingProvider
from centroid_router.monitoring.metrics import centroid_builds_total, classifications_total
from centroid_router.persistence.exceptions import PersistenceError
from centroid_router.persistence.file_store import FileCentroidStore
from centroid_router.persistence.memory_store import InMemoryCentroidStore
from centroid_router.service import RoutingService


def _counter_value(counter, **labels) -> float:
    return counter.labels(**labels)._value.get()


@pytest.mark.asyncio
async def test_build_saves_table(routing_service, memory_store, sample_examples):
    table = await routing_service.build(sample_examples)
    
    assert memory_store.load() == table
    assert list(table) == ["billing", "support", "sales"]


@pytest.mark.asyncio
async def test_build_with_summary(routing_service, sample_examples):
    summary = await routing_service.build_with_summary(sample_examples)
    
    assert summary.labels == ["billing", "support", "sales"]
    assert summary.example_count == 5
    assert summary.dimension == 3
    assert summary.duration_ms >= 0


@pytest.mark.asyncio
async def test_failed_build_keeps_previous_table(fake_provider, two_axis_table):
    store = InMemoryCentroidStore(two_axis_table)
    service = RoutingService(fake_provider, store)
    failures_before = _counter_value(centroid_builds_total, status="failure")
    
    with pytest.raises(EmptyInputError):
        await service.build([])
    
    assert store.load() == two_axis_table
    assert _counter_value(centroid_builds_total, status="failure") == failures_before + 1


@pytest.mark.asyncio
async def test_build_propagates_store_failure(fake_provider, sample_examples):
    store = MagicMock()
    store.save.side_effect = PersistenceError("disk full")
    service = RoutingService(fake_provider, store)
    
    with pytest.raises(PersistenceError):
        await service.build(sample_examples)


@pytest.mark.asyncio
async def test_classify_after_build(routing_service, sample_examples):
    await routing_service.build(sample_examples)
    
    result = await routing_service.classify("My card was billed two times")
    
    assert result.routed == "billing"


@pytest.mark.asyncio
async def test_classify_records_outcome_metric(routing_service, sample_examples):
    await routing_service.build(sample_examples)
    routed_before = _counter_value(classifications_total, outcome="routed")
    unclassified_before = _counter_value(classifications_total, outcome="unclassified")
    
    await routing_service.classify("My card was billed two times")
    await routing_service.classify("Totally unrelated")
    
    assert _counter_value(classifications_total, outcome="routed") == routed_before + 1
    assert _counter_value(classifications_total, outcome="unclassified") == unclassified_before + 1


@pytest.mark.asyncio
async def test_classify_without_build(routing_service, fake_provider):
    with pytest.raises(CentroidsUnavailableError) as exc_info:
        await routing_service.classify("hello")
    
    assert "build" in exc_info.value.message
    assert fake_provider.calls == []


@pytest.mark.asyncio
async def test_classify_with_empty_stored_table(fake_provider):
    service = RoutingService(fake_provider, InMemoryCentroidStore({}))
    
    with pytest.raises(CentroidsUnavailableError):
        await service.classify("hello")


@pytest.mark.asyncio
async def test_classify_invalid_text_skips_store(fake_provider):
    store = MagicMock()
    service = RoutingService(fake_provider, store)
    
    with pytest.raises(InvalidRequestError):
        await service.classify(None)
    
    store.load.assert_not_called()
    assert fake_provider.calls == []


@pytest.mark.asyncio
async def test_uncached_service_sees_external_rebuild(provider_factory):
    """Without caching, a table written by another process is used immediately."""
    provider = provider_factory({"query": [0.9, 0.1]})
    store = InMemoryCentroidStore({"A": [1.0, 0.0]})
    service = RoutingService(provider, store, cache_centroids=False)
    
    assert (await service.classify("query")).routed == "A"
    
    store.save({"B": [1.0, 0.0]})
    
    assert (await service.classify("query")).routed == "B"


@pytest.mark.asyncio
async def test_cached_service_loads_once(provider_factory):
    provider = provider_factory({"query": [0.9, 0.1]})
    store = MagicMock()
    store.load.return_value = {"A": [1.0, 0.0]}
    service = RoutingService(provider, store, cache_centroids=True)
    
    await service.classify("query")
    await service.classify("query")
    
    store.load.assert_called_once()


@pytest.mark.asyncio
async def test_cached_service_refreshes_on_build(fake_provider, sample_examples, two_axis_table):
    store = InMemoryCentroidStore(two_axis_table)
    service = RoutingService(fake_provider, store, cache_centroids=True)
    assert service.labels() == ["A", "B"]
    
    await service.build(sample_examples)
    
    assert service.labels() == ["billing", "support", "sales"]


def test_invalidate_drops_cache(two_axis_table, fake_provider):
    store = InMemoryCentroidStore(two_axis_table)
    service = RoutingService(fake_provider, store, cache_centroids=True)
    assert service.labels() == ["A", "B"]
    
    store.save({"C": [1.0, 0.0]})
    assert service.labels() == ["A", "B"]
    
    service.invalidate()
    assert service.labels() == ["C"]


def test_threshold_property(fake_provider, memory_store):
    service = RoutingService(fake_provider, memory_store, threshold=0.25)
    assert service.threshold == 0.25


def test_from_settings(test_settings):
    service = RoutingService.from_settings(test_settings)
    
    assert isinstance(service.provider, OpenAIEmbeddingProvider)
    assert isinstance(service.store, FileCentroidStore)
    assert service.threshold == test_settings.CLASSIFICATION_THRESHOLD
    assert service.cache_centroids is False


@pytest.mark.asyncio
async def test_close_closes_provider(routing_service, fake_provider):
    await routing_service.close()
    assert fake_provider.closed


class _RendezvousStore(InMemoryCentroidStore):
    """Store whose load() only returns once two loads are in flight together."""

    def __init__(self, table):
        super().__init__(table)
        self.barrier = threading.Barrier(2, timeout=5)

    def load(self):
        self.barrier.wait()
        return super().load()


@pytest.mark.asyncio
async def test_concurrent_classifies_load_off_the_event_loop(provider_factory, two_axis_table):
    provider = provider_factory({"query": [0.9, 0.1]})
    service = RoutingService(provider, _RendezvousStore(two_axis_table))

    first, second = await asyncio.gather(service.classify("query"), service.classify("query"))

    assert first.routed == second.routed == "A"


@pytest.mark.asyncio
async def test_build_saves_off_the_event_loop(fake_provider, sample_examples):
    store = MagicMock()
    loop_thread = threading.get_ident()
    store.save.side_effect = lambda table: setattr(store, "save_thread", threading.get_ident())
    service = RoutingService(fake_provider, store)

    await service.build(sample_examples)

    assert store.save_thread != loop_thread
