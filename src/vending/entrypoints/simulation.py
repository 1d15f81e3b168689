"""
Simulation en ligne de commande.

Génère des events aléatoires, les publie un par un en journalisant
l'état des distributeurs, puis republie les events d'alerte
accumulés dans l'outbox.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Iterable, Sequence

from vending import config
from vending.domain import events
from vending.service_layer import bootstrap

logger = logging.getLogger(__name__)


def random_machine_id(rng: random.Random, machine_ids: Sequence[str]) -> str:
    return rng.choice(machine_ids)


def generate_event(rng: random.Random, machine_ids: Sequence[str]) -> events.Event:
    """Une vente de 1 ou 2 unités, ou un réapprovisionnement de 3 ou 5 unités."""
    if rng.random() < 0.5:
        quantité = 1 if rng.random() < 0.5 else 2
        return events.SaleEvent(random_machine_id(rng, machine_ids), quantité)
    quantité = 3 if rng.random() < 0.5 else 5
    return events.RefillEvent(random_machine_id(rng, machine_ids), quantité)


def log_machines(simulation: bootstrap.Simulation) -> None:
    for machine in simulation.machines:
        logger.info("%s", machine)


def run(simulation: bootstrap.Simulation, initial: Iterable[events.Event]) -> tuple[int, int]:
    """
    Publie les events initiaux, puis les alertes qu'ils ont produites.

    Retourne le nombre d'events initiaux et le nombre d'alertes republiées.
    """
    initial = list(initial)
    logger.info(">>>> Traitement des events initiaux : %d events", len(initial))
    log_machines(simulation)
    logger.info("%s", simulation.pubsub.get_subscriber_info())

    for event in initial:
        logger.info(">> Application de l'event : %s", event)
        simulation.pubsub.publish(event)
        log_machines(simulation)

    logger.info(">>>> Traitement des alertes : %d events", len(simulation.outbox))
    alertes = 0
    for event in simulation.outbox.drain():
        logger.info(">> Application de l'event : %s", event)
        simulation.pubsub.publish(event)
        log_machines(simulation)
        alertes += 1

    logger.info(">>>> Terminé")
    return len(initial), alertes


def main(argv: Sequence[str] | None = None) -> None:
    settings = config.get_settings()

    parser = argparse.ArgumentParser(description="Simulation de distributeurs automatiques")
    parser.add_argument("--events", type=int, default=5, help="Nombre d'events aléatoires")
    parser.add_argument("--seed", type=int, default=settings.seed, help="Graine aléatoire")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=config.LOG_LEVELS,
        default=settings.log_level,
        help="Niveau de log",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(message)s")

    simulation = bootstrap.bootstrap()
    rng = random.Random(args.seed)
    machine_ids = [machine.id for machine in simulation.machines]
    run(simulation, [generate_event(rng, machine_ids) for _ in range(args.events)])


if __name__ == "__main__":
    main()
