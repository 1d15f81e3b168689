"""
Modèle de domaine des distributeurs automatiques.

Un Machine est une entité : il a une identité (son id) et un niveau
de stock qui évolue au fil des ventes et des réapprovisionnements.
L'entité elle-même n'impose aucun invariant : c'est aux subscribers
de garantir que le stock ne devient jamais négatif.
"""

from __future__ import annotations

# Stock d'un distributeur neuf, et niveau rétabli par le réassort automatique.
DEFAULT_STOCK_LEVEL = 10

# En dessous de ce seuil, le stock est considéré comme bas.
LOW_STOCK_THRESHOLD = 3


class UnknownMachine(LookupError):
    """Levée quand un event référence un distributeur absent de la collection."""

    def __init__(self, machine_id: str):
        super().__init__(f"Distributeur inconnu : {machine_id}")
        self.machine_id = machine_id


class UnexpectedEventType(TypeError):
    """Levée quand un subscriber reçoit un event d'un type qu'il ne traite pas."""

    def __init__(self, expected, received):
        super().__init__(
            f"Type d'event inattendu : {received.value} (attendu : {expected.value})"
        )
        self.expected = expected
        self.received = received


class Machine:
    """
    Entité représentant un distributeur.

    L'égalité et le hash reposent sur l'id, comme pour toute entité.
    Aucune validation à la construction : un stock initial négatif
    est accepté tel quel.
    """

    def __init__(self, id: str, stock_level: int = DEFAULT_STOCK_LEVEL):
        self._id = id
        self.stock_level = stock_level

    @property
    def id(self) -> str:
        return self._id

    @property
    def low_stock(self) -> bool:
        return self.stock_level < LOW_STOCK_THRESHOLD

    def __repr__(self) -> str:
        return f"<Machine {self._id}>"

    def __str__(self) -> str:
        return f"Machine(id={self._id}, stock_level={self.stock_level})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Machine):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)
