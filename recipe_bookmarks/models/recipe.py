"""Transient recipe section values passed between extractors."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class RecipeSections:
    """Ingredients and instructions as newline-joined text."""
    ingredients: Optional[str] = None
    instructions: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.ingredients and not self.instructions

    def or_else(self, other: Optional["RecipeSections"]) -> "RecipeSections":
        """Fill fields missing here from `other`, field by field."""
        if other is None:
            return self
        return RecipeSections(
            ingredients=self.ingredients or other.ingredients,
            instructions=self.instructions or other.instructions,
        )
