"""
Seed data for the donation dataset.

The service starts from the built-in fixture below unless a JSON dataset
file is configured.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Union

from loguru import logger

from app.db.models import Category, Donation
from app.db.store import DonationDataset
from app.schemas.donations import DatasetFile

CATEGORY_FIXTURES: List[Dict[str, Any]] = [
    {"id": "cat-1", "name": "Roupas", "measure_unity": "peças"},
    {"id": "cat-2", "name": "Alimentos", "measure_unity": "kg"},
    {"id": "cat-3", "name": "Brinquedos", "measure_unity": "unidades"},
    {"id": "cat-4", "name": "Livros", "measure_unity": "unidades"},
    {"id": "cat-5", "name": "Eletrônicos", "measure_unity": "unidades"},
]


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


DONATION_FIXTURES: List[Dict[str, Any]] = [
    {
        "id": "don-1",
        "category_id": "cat-1",
        "name": "Camisetas",
        "description": "Camisetas em bom estado",
        "initial_quantity": 150,
        "current_quantity": 45,
        "donator_name": "João Silva",
        "gender": "Unissex",
        "size": "M/G",
        "created_at": _day(2024, 1, 15),
    },
    {
        "id": "don-2",
        "category_id": "cat-1",
        "name": "Calças",
        "description": "Calças jeans e sociais",
        "initial_quantity": 80,
        "current_quantity": 25,
        "donator_name": "Maria Santos",
        "gender": "Feminino",
        "size": "36-42",
        "created_at": _day(2024, 1, 20),
    },
    {
        "id": "don-3",
        "category_id": "cat-2",
        "name": "Arroz",
        "description": "Arroz tipo 1",
        "initial_quantity": 200,
        "current_quantity": 80,
        "donator_name": "Padaria Central",
        "created_at": _day(2024, 2, 1),
    },
    {
        "id": "don-4",
        "category_id": "cat-2",
        "name": "Feijão",
        "description": "Feijão carioca",
        "initial_quantity": 150,
        "current_quantity": 30,
        "donator_name": "Supermercado ABC",
        "created_at": _day(2024, 2, 5),
    },
    {
        "id": "don-5",
        "category_id": "cat-3",
        "name": "Brinquedos Educativos",
        "description": "Brinquedos para crianças de 3-8 anos",
        "initial_quantity": 60,
        "current_quantity": 15,
        "donator_name": "Loja de Brinquedos",
        "created_at": _day(2024, 2, 10),
    },
    {
        "id": "don-6",
        "category_id": "cat-4",
        "name": "Livros Infantis",
        "description": "Livros para crianças",
        "initial_quantity": 120,
        "current_quantity": 70,
        "donator_name": "Biblioteca Municipal",
        "created_at": _day(2024, 2, 15),
    },
    {
        "id": "don-7",
        "category_id": "cat-5",
        "name": "Smartphones",
        "description": "Smartphones usados em bom estado",
        "initial_quantity": 25,
        "current_quantity": 5,
        "donator_name": "Tech Store",
        "created_at": _day(2024, 2, 20),
    },
]


def build_default_dataset() -> DonationDataset:
    """
    Build the built-in fixture dataset.

    Category creation timestamps and donation update timestamps default to
    the time the dataset is built.
    """
    categories = [Category(**data) for data in CATEGORY_FIXTURES]
    donations = [Donation(**data) for data in DONATION_FIXTURES]
    return DonationDataset(categories, donations)


def load_dataset_file(path: Union[str, Path]) -> DonationDataset:
    """
    Load a dataset from a JSON file with ``categories`` and ``donations`` lists.

    Raises:
        OSError: If the file cannot be read
        pydantic.ValidationError: If an entry is malformed
        ValueError: If the records are inconsistent
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    dataset_file = DatasetFile.model_validate(raw)
    dataset = DonationDataset(
        [entry.to_record() for entry in dataset_file.categories],
        [entry.to_record() for entry in dataset_file.donations],
    )
    logger.info(f"Loaded dataset file {path}")
    return dataset
