import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.db.seed import build_default_dataset, load_dataset_file


def test_default_dataset_totals():
    dataset = build_default_dataset()
    assert sum(d.initial_quantity for d in dataset.donations) == 785
    assert sum(d.current_quantity for d in dataset.donations) == 270


def test_default_dataset_dates_are_utc():
    dataset = build_default_dataset()
    assert dataset.donations[0].created_at == datetime(2024, 1, 15, tzinfo=timezone.utc)


def test_donations_without_gender_stay_unset():
    dataset = build_default_dataset()
    assert dataset.donations[2].gender is None
    assert dataset.donations[2].size is None


def test_load_dataset_file(tmp_path):
    path = tmp_path / "dataset.json"
    path.write_text(
        json.dumps(
            {
                "categories": [{"id": "x", "name": "Cestas", "measure_unity": "unidades"}],
                "donations": [
                    {
                        "id": "n-1",
                        "category_id": "x",
                        "name": "Cesta básica",
                        "initial_quantity": 40,
                        "current_quantity": 4,
                        "created_at": "2024-05-03T10:00:00Z",
                    }
                ],
            }
        ),
        encoding="utf-8",
    )

    dataset = load_dataset_file(path)

    assert [c.name for c in dataset.categories] == ["Cestas"]
    donation = dataset.donations[0]
    assert donation.initial_quantity == 40
    assert donation.created_at == datetime(2024, 5, 3, 10, tzinfo=timezone.utc)
    assert donation.is_running_low is True


def test_load_dataset_file_rejects_negative_quantity(tmp_path):
    path = tmp_path / "dataset.json"
    path.write_text(
        json.dumps(
            {
                "categories": [{"id": "x", "name": "Cestas", "measure_unity": "unidades"}],
                "donations": [{"id": "n-1", "category_id": "x", "name": "Cesta", "initial_quantity": -1}],
            }
        ),
        encoding="utf-8",
    )
    with pytest.raises(ValidationError):
        load_dataset_file(path)


def test_load_dataset_file_rejects_unknown_category(tmp_path):
    path = tmp_path / "dataset.json"
    path.write_text(
        json.dumps({"categories": [], "donations": [{"id": "n-1", "category_id": "x", "name": "Cesta"}]}),
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="unknown category"):
        load_dataset_file(path)
