from .equipment import FailureRecord, OptionItem
from .lens_order import LensOrder

__all__ = ["FailureRecord", "OptionItem", "LensOrder"]
