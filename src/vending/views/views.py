"""
Views (lecture) sur l'état de la simulation.

Fonctions de lecture pure : elles projettent les distributeurs et
l'outbox en dictionnaires, sans passer par le service de publication
et sans rien modifier.
"""

from __future__ import annotations

from vending.adapters.outbox import InMemoryOutbox
from vending.adapters.repository import MachineCollection
from vending.domain import model


def _as_dict(machine: model.Machine) -> dict:
    return {
        "id": machine.id,
        "stock_level": machine.stock_level,
        "low_stock": machine.low_stock,
    }


def machines(collection: MachineCollection) -> list[dict]:
    return [_as_dict(machine) for machine in collection]


def machine(collection: MachineCollection, machine_id: str) -> dict | None:
    found = collection.get_machine_by_id(machine_id)
    if found is None:
        return None
    return _as_dict(found)


def pending_warnings(outbox: InMemoryOutbox) -> list[dict]:
    """Events d'alerte en attente de republication."""
    return [
        {"type": event.type.value, "machine_id": event.machine_id}
        for event in outbox
    ]
