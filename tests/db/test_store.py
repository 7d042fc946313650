import pytest

from app.db.models import Category, Donation
from app.db.store import DonationDataset


def test_dataset_keeps_insertion_order(dataset):
    assert [c.id for c in dataset.categories] == ["cat-1", "cat-2", "cat-3", "cat-4", "cat-5"]
    assert [d.id for d in dataset.donations] == [f"don-{i}" for i in range(1, 8)]
    assert len(dataset) == 7


def test_category_lookup(dataset):
    assert dataset.category("cat-2").name == "Alimentos"
    assert dataset.category("missing") is None
    assert dataset.category_for(dataset.donations[0]).name == "Roupas"


def test_collections_are_tuples(dataset):
    assert isinstance(dataset.categories, tuple)
    assert isinstance(dataset.donations, tuple)


def test_unknown_category_is_rejected():
    categories = [Category(id="a", name="A", measure_unity="kg")]
    donations = [Donation(id="d", category_id="b", name="X")]
    with pytest.raises(ValueError, match="unknown category"):
        DonationDataset(categories, donations)


def test_duplicate_category_is_rejected():
    categories = [Category(id="a", name="A", measure_unity="kg"), Category(id="a", name="B", measure_unity="kg")]
    with pytest.raises(ValueError, match="Duplicate category"):
        DonationDataset(categories, [])


def test_duplicate_donation_is_rejected():
    categories = [Category(id="a", name="A", measure_unity="kg")]
    donations = [Donation(id="d", category_id="a", name="X"), Donation(id="d", category_id="a", name="Y")]
    with pytest.raises(ValueError, match="Duplicate donation"):
        DonationDataset(categories, donations)


def test_input_lists_are_copied():
    categories = [Category(id="a", name="A", measure_unity="kg")]
    dataset = DonationDataset(categories, [])
    categories.append(Category(id="b", name="B", measure_unity="kg"))
    assert len(dataset.categories) == 1
