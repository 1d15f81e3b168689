"""
Subscribers : les handlers abonnés aux events des distributeurs.

Chaque subscriber ne traite qu'un seul type d'event. Il résout le
distributeur visé dans la collection partagée, modifie son stock,
et peut déposer un event d'alerte dans l'outbox partagée.

Les seuils sont toujours comparés au stock AVANT la mutation :
une alerte n'est émise qu'au franchissement du seuil, pas à chaque
event tant que le stock reste du même côté.
"""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING

from vending.domain import events, model
from vending.domain.model import DEFAULT_STOCK_LEVEL, LOW_STOCK_THRESHOLD

if TYPE_CHECKING:
    from vending.adapters.outbox import AbstractOutbox
    from vending.adapters.repository import MachineCollection

logger = logging.getLogger(__name__)


class AbstractSubscriber(abc.ABC):
    """
    Interface abstraite des subscribers.

    Template Method : handle() vérifie le type de l'event et résout
    le distributeur, puis délègue à _handle(). Un event d'un autre
    type ou un distributeur inconnu lèvent une exception avant
    toute mutation.
    """

    handles: events.EventType

    def __init__(self, machines: MachineCollection):
        self.machines = machines

    def handle(self, event: events.Event) -> None:
        if event.type is not self.handles:
            raise model.UnexpectedEventType(expected=self.handles, received=event.type)
        machine = self.machines.get(event.machine_id)
        self._handle(event, machine)

    @abc.abstractmethod
    def _handle(self, event, machine: model.Machine) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.handles.value}>"


class SaleSubscriber(AbstractSubscriber):
    """Décrémente le stock, sans jamais descendre sous zéro."""

    handles = events.EventType.SALE

    def __init__(self, machines: MachineCollection, outbox: AbstractOutbox):
        super().__init__(machines)
        self.outbox = outbox

    def _handle(self, event: events.SaleEvent, machine: model.Machine) -> None:
        vendu = event.sold_quantity

        if (
            machine.stock_level >= LOW_STOCK_THRESHOLD
            and machine.stock_level - vendu < LOW_STOCK_THRESHOLD
        ):
            logger.info("Stock bas pour le distributeur %s", machine.id)
            self.outbox.append(events.LowStockWarningEvent(machine.id))

        machine.stock_level = max(0, machine.stock_level - vendu)
        logger.debug("Vente de %d sur %s", vendu, machine)


class RefillSubscriber(AbstractSubscriber):
    """Incrémente le stock, sans plafond."""

    handles = events.EventType.REFILL

    def __init__(self, machines: MachineCollection, outbox: AbstractOutbox):
        super().__init__(machines)
        self.outbox = outbox

    def _handle(self, event: events.RefillEvent, machine: model.Machine) -> None:
        ajout = event.refill_quantity

        if (
            machine.stock_level < LOW_STOCK_THRESHOLD
            and machine.stock_level + ajout >= LOW_STOCK_THRESHOLD
        ):
            logger.info("Stock rétabli pour le distributeur %s", machine.id)
            self.outbox.append(events.StockOkEvent(machine.id))

        machine.stock_level += ajout
        logger.debug("Réapprovisionnement de %d sur %s", ajout, machine)


class LowStockSubscriber(AbstractSubscriber):
    """
    Réassort automatique.

    Ramène le stock au niveau par défaut si, au moment où l'alerte
    est traitée, il est toujours sous le seuil. Si un réapprovisionnement
    est passé entre-temps, l'alerte est ignorée.
    """

    handles = events.EventType.LOW

    def _handle(self, event: events.LowStockWarningEvent, machine: model.Machine) -> None:
        if machine.stock_level < LOW_STOCK_THRESHOLD:
            logger.info(
                "Réassort automatique de %s : %d -> %d",
                machine.id, machine.stock_level, DEFAULT_STOCK_LEVEL,
            )
            machine.stock_level = DEFAULT_STOCK_LEVEL
