"""
Events du domaine.

Les events représentent des faits survenus sur un distributeur.
Ils sont immuables et portent l'id du distributeur concerné.
Chaque variante expose son tag via l'attribut de classe `type`,
qui sert de clé de routage au service de publication.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import ClassVar, Union


class EventType(str, Enum):
    """Ensemble fermé des types d'events du système."""

    SALE = "sale"
    REFILL = "refill"
    LOW = "low"
    OK = "ok"


@dataclass(frozen=True)
class Event:
    """Classe de base pour tous les events du domaine."""

    type: ClassVar[EventType]

    machine_id: str

    def __str__(self) -> str:
        attributs = ", ".join(
            f"{f.name}={getattr(self, f.name)}" for f in fields(self)
        )
        return f"{type(self).__name__}(type={self.type.value}, {attributs})"


@dataclass(frozen=True)
class SaleEvent(Event):
    """Des unités ont été vendues sur un distributeur."""

    type: ClassVar[EventType] = EventType.SALE

    sold_quantity: int


@dataclass(frozen=True)
class RefillEvent(Event):
    """Un distributeur a été réapprovisionné."""

    type: ClassVar[EventType] = EventType.REFILL

    refill_quantity: int


@dataclass(frozen=True)
class LowStockWarningEvent(Event):
    """Le stock d'un distributeur est passé sous le seuil bas."""

    type: ClassVar[EventType] = EventType.LOW


@dataclass(frozen=True)
class StockOkEvent(Event):
    """Le stock d'un distributeur est repassé au-dessus du seuil bas."""

    type: ClassVar[EventType] = EventType.OK


WarningEvent = Union[LowStockWarningEvent, StockOkEvent]
