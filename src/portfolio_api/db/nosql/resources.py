from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceKind:
    """A CRUD domain backed by one collection."""

    name: str
    singular: str
    custom_id_field: str = "id"

    @property
    def collection(self) -> str:
        return self.name

    @property
    def label(self) -> str:
        return self.singular.capitalize()


CARDS = ResourceKind(name="cards", singular="card")
CATEGORIES = ResourceKind(name="categories", singular="category")
USERS = ResourceKind(name="users", singular="user", custom_id_field="uid")
PORTFOLIOS = ResourceKind(name="portfolios", singular="portfolio")

RESOURCE_KINDS: tuple[ResourceKind, ...] = (CARDS, CATEGORIES, USERS, PORTFOLIOS)
