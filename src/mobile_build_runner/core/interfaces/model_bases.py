"""Nominal marker base class for Pydantic domain models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Nominal marker for Pydantic-based domain models."""

    model_config = ConfigDict(frozen=True)

    def __repr__(self) -> str:
        """Provide a concise, one-line summary of the object."""
        class_name = self.__class__.__name__

        repr_attrs = ("path", "output", "name")
        for attr in repr_attrs:
            if hasattr(self, attr):
                attr_value = getattr(self, attr)
                if attr_value is not None:
                    return f'<{class_name} {attr}="{attr_value}">'

        return f"<{class_name}>"
