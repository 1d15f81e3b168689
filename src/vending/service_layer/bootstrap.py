"""
Bootstrap : assemblage de la simulation (Composition Root).

Ce module construit les distributeurs, l'outbox partagée, les
subscribers et le service de publication, puis câble les abonnements.
C'est le seul endroit qui connaît les implémentations concrètes ;
les tests y injectent leurs propres collections ou outbox.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from vending import config
from vending.adapters import outbox as outbox_adapter
from vending.adapters import repository
from vending.domain import events, model
from vending.service_layer import handlers, messagebus

logger = logging.getLogger(__name__)


@dataclass
class Simulation:
    """Les trois collaborateurs partagés d'une simulation."""

    machines: repository.MachineCollection
    outbox: outbox_adapter.InMemoryOutbox
    pubsub: messagebus.PublishSubscribeService

    def publish_warnings(self) -> int:
        """Vide l'outbox et republie ses events ; retourne leur nombre."""
        return self.pubsub.publish_all(self.outbox.drain())


def bootstrap(
    machines: repository.MachineCollection | None = None,
    outbox: outbox_adapter.InMemoryOutbox | None = None,
    sale_subscribers: int | None = None,
) -> Simulation:
    """
    Construit et retourne une Simulation configurée.

    Par défaut : un distributeur par id configuré, N subscribers de
    vente, un subscriber de réapprovisionnement et un subscriber de
    réassort automatique abonné aux alertes de stock bas.
    """
    settings = config.get_settings()

    if machines is None:
        machines = repository.MachineCollection(
            model.Machine(machine_id) for machine_id in settings.machine_ids
        )

    if outbox is None:
        outbox = outbox_adapter.InMemoryOutbox()

    if sale_subscribers is None:
        sale_subscribers = settings.sale_subscribers

    pubsub = messagebus.PublishSubscribeService()
    for _ in range(sale_subscribers):
        pubsub.subscribe(events.EventType.SALE, handlers.SaleSubscriber(machines, outbox))
    pubsub.subscribe(events.EventType.REFILL, handlers.RefillSubscriber(machines, outbox))
    pubsub.subscribe(events.EventType.LOW, handlers.LowStockSubscriber(machines))

    logger.debug(
        "Simulation prête : %d distributeurs, %s",
        machines.get_machine_count(), pubsub.get_subscriber_info(),
    )
    return Simulation(machines=machines, outbox=outbox, pubsub=pubsub)
