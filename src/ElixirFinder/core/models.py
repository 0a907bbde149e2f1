from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence


@dataclass(frozen=True, slots=True)
class Inventor:
    """Inventor reference attached to an elixir."""

    full_name: str


@dataclass(frozen=True, slots=True)
class Ingredient:
    """Single ingredient entry, in payload order."""

    name: str


@dataclass(frozen=True, slots=True)
class Elixir:
    """Internal elixir model.

    The filter pipeline does not interpret these fields; they are carried from
    the remote payload to the presentation layer.

    Attributes:
        id: Remote identifier, stringified.
        name: Display name.
        effect: Effect description if provided.
        difficulty: Brewing difficulty label if provided.
        inventor: Inventor reference if provided.
        manufacturer: Manufacturer name if provided.
        ingredients: Ingredients in payload order.
        extra: Payload keys not mapped above.
    """

    id: str
    name: str
    effect: Optional[str] = None
    difficulty: Optional[str] = None
    inventor: Optional[Inventor] = None
    manufacturer: Optional[str] = None
    ingredients: Sequence[Ingredient] = ()
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ingredients", tuple(self.ingredients))
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))


class FetchStatus(str, Enum):
    """Lifecycle of the current request."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True, slots=True)
class ResultState:
    """Snapshot consumed by the presentation layer.

    Instances are never mutated; every transition produces a new value.

    Attributes:
        items: Elixirs from the last successful request.
        loading: Whether the current request is in flight.
        error: Human-readable failure message, None unless ``status`` is FAILURE.
        status: Request lifecycle state.
        token: RequestToken of the request this state belongs to (0 before any).
    """

    items: tuple[Elixir, ...] = ()
    loading: bool = False
    error: str | None = None
    status: FetchStatus = FetchStatus.IDLE
    token: int = 0
