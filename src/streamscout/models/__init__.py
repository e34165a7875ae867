"""Domain models for the streamscout application."""

from streamscout.models.core import FilterCriteria, ItemRecord

__all__ = ["FilterCriteria", "ItemRecord"]
