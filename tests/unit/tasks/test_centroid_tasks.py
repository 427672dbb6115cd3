"""
Unit tests for the Celery rebuild task (executed eagerly, no broker).
"""

import json
from unittest.mock import PropertyMock, patch

import pytest

from centroid_router.core.exceptions import EmptyInputError, InvalidTrainingDataError
from centroid_router.persistence.memory_store import InMemoryCentroidStore
from centroid_router.service import RoutingService
from centroid_router.tasks.celery_app import celery_app
from centroid_router.tasks.centroid_tasks import CentroidTask, rebuild_centroids_task


@pytest.fixture
def task_service(fake_provider, memory_store):
    """Patch the per-worker service with one over the fake provider."""
    service = RoutingService(fake_provider, memory_store)
    with patch.object(CentroidTask, "service", new_callable=PropertyMock, return_value=service):
        yield service


def test_task_is_registered():
    assert "rebuild_centroids" in celery_app.tasks


def test_rebuild_writes_table(task_service, memory_store, fake_provider, training_file):
    result = rebuild_centroids_task.apply(args=(str(training_file),))
    
    assert result.successful()
    summary = result.get()
    assert summary["labels"] == ["billing", "support", "sales"]
    assert summary["example_count"] == 5
    assert summary["dimension"] == 3
    assert list(memory_store.load()) == ["billing", "support", "sales"]
    assert fake_provider.closed


def test_rebuild_result_is_json_serializable(task_service, training_file):
    summary = rebuild_centroids_task.apply(args=(str(training_file),)).get()
    
    assert json.loads(json.dumps(summary)) == summary


def test_rebuild_uses_default_training_path(task_service, memory_store, training_file):
    with patch("centroid_router.tasks.centroid_tasks.settings") as mock_settings:
        mock_settings.TRAINING_DATA_PATH = str(training_file)
        
        result = rebuild_centroids_task.apply()
    
    assert result.successful()
    assert memory_store.exists()


def test_rebuild_empty_training_file_keeps_previous_table(fake_provider, tmp_path, two_axis_table):
    store = InMemoryCentroidStore(two_axis_table)
    service = RoutingService(fake_provider, store)
    path = tmp_path / "emails.json"
    path.write_text("[]", encoding="utf-8")
    
    with patch.object(CentroidTask, "service", new_callable=PropertyMock, return_value=service):
        result = rebuild_centroids_task.apply(args=(str(path),))
    
    assert result.failed()
    with pytest.raises(EmptyInputError):
        result.get()
    assert store.load() == two_axis_table


def test_rebuild_invalid_training_file(task_service, memory_store, tmp_path):
    path = tmp_path / "emails.json"
    path.write_text('[{"text": "no label"}]', encoding="utf-8")
    
    result = rebuild_centroids_task.apply(args=(str(path),))
    
    assert result.failed()
    with pytest.raises(InvalidTrainingDataError):
        result.get()
    assert not memory_store.exists()
