"""Coffee record and the request schema clients may send.

`Coffee` is what the store keeps. `CoffeeWrite` is what the API accepts: only
`name` is client-settable, `id` and `version` in a request body are ignored.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict


@dataclass(slots=True)
class Coffee:
    name: str
    version: int = 1
    id: int | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "version": self.version}

    def copy(self) -> "Coffee":
        return Coffee(**asdict(self))


class CoffeeWrite(BaseModel):
    """Body of POST /coffee and PUT /coffee/{id}."""

    model_config = ConfigDict(extra="ignore")

    name: str
