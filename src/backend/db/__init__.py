from .base import BaseProductionRepository
from .repository import ProductionRepository, create_db_engine, describe_db_error

__all__ = [
    "BaseProductionRepository",
    "ProductionRepository",
    "create_db_engine",
    "describe_db_error",
]
