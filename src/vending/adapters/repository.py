"""
Collection de distributeurs.

La MachineCollection joue le rôle de repository en mémoire :
une interface de type collection (ajout, lecture par id) qui
masque le stockage. Elle est partagée par référence entre tous
les subscribers : une mutation faite par l'un est visible des autres.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from vending.domain import model


class MachineCollection:
    """
    Table de correspondance id -> Machine.

    Au plus un distributeur par id : un ajout avec un id existant
    remplace l'entrée précédente (le dernier écrit gagne).
    """

    def __init__(self, machines: Iterable[model.Machine] = ()):
        self._machines: dict[str, model.Machine] = {}
        for machine in machines:
            self.add_machine(machine)

    def add_machine(self, machine: model.Machine) -> None:
        self._machines[machine.id] = machine

    def get_machine_by_id(self, machine_id: str) -> model.Machine | None:
        """Retourne le distributeur, ou None s'il est absent."""
        return self._machines.get(machine_id)

    def get(self, machine_id: str) -> model.Machine:
        """
        Lecture stricte, utilisée par les handlers.

        Lève UnknownMachine plutôt que de laisser l'appelant
        manipuler un distributeur inexistant.
        """
        machine = self.get_machine_by_id(machine_id)
        if machine is None:
            raise model.UnknownMachine(machine_id)
        return machine

    def get_machine_count(self) -> int:
        return len(self._machines)

    def __len__(self) -> int:
        return len(self._machines)

    def __iter__(self) -> Iterator[model.Machine]:
        return iter(self._machines.values())

    def __contains__(self, machine_id: object) -> bool:
        return machine_id in self._machines
