"""
Service de publication / abonnement.

Le service est le point central de dispatch des events vers
leurs subscribers.

Fonctionnement :
1. Un appelant publie un event
2. Le service trouve la liste des subscribers de son type
3. Chaque subscriber est appelé, dans l'ordre d'abonnement

Tout est synchrone : publish() ne rend la main qu'une fois tous
les subscribers exécutés. Les events d'alerte déposés dans l'outbox
ne sont PAS republiés automatiquement ; c'est à l'appelant de le faire.
Une erreur dans un subscriber remonte directement à l'appelant.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from vending.domain import events

logger = logging.getLogger(__name__)


class Subscriber(Protocol):
    def handle(self, event: events.Event) -> None: ...


class PublishSubscribeService:
    """
    Routeur type d'event -> liste ordonnée de subscribers.

    Les listes sont indépendantes par type. Un même subscriber peut
    être abonné plusieurs fois ; il sera alors appelé autant de fois.
    """

    def __init__(self) -> None:
        self._subscribers: dict[events.EventType, list[Subscriber]] = {
            event_type: [] for event_type in events.EventType
        }

    def subscribe(self, event_type: events.EventType, subscriber: Subscriber) -> None:
        self._subscribers[event_type].append(subscriber)

    def unsubscribe(self, event_type: events.EventType, subscriber: Subscriber) -> None:
        """Retire la première occurrence du subscriber (par identité), s'il est présent."""
        abonnés = self._subscribers[event_type]
        for index, abonné in enumerate(abonnés):
            if abonné is subscriber:
                del abonnés[index]
                return

    def subscribers(self, event_type: events.EventType) -> tuple[Subscriber, ...]:
        return tuple(self._subscribers[event_type])

    def publish(self, event: events.Event) -> None:
        """
        Dispatch un event vers tous les subscribers de son type.

        On itère sur une copie de la liste : un subscriber qui
        (dés)abonne pendant le dispatch ne modifie pas le tour en cours.
        """
        abonnés = list(self._subscribers[event.type])
        if not abonnés:
            logger.info("Aucun subscriber pour %s, rien à faire", event)
            return
        for subscriber in abonnés:
            logger.debug("Traitement de l'event %s avec %r", event, subscriber)
            subscriber.handle(event)

    def publish_all(self, messages: Iterable[events.Event]) -> int:
        """Publie chaque event dans l'ordre et retourne le nombre publié."""
        publiés = 0
        for event in messages:
            self.publish(event)
            publiés += 1
        return publiés

    def get_subscriber_count(self) -> int:
        """
        Nombre de subscribers de vente et de réapprovisionnement.

        Les listes LOW et OK ne sont pas comptées, pour rester compatible
        avec le comptage historique. Voir get_total_subscriber_count().
        """
        return (
            len(self._subscribers[events.EventType.SALE])
            + len(self._subscribers[events.EventType.REFILL])
        )

    def get_total_subscriber_count(self) -> int:
        return sum(len(abonnés) for abonnés in self._subscribers.values())

    def get_subscriber_info(self) -> str:
        return (
            f"sale_subscribers={len(self._subscribers[events.EventType.SALE])}, "
            f"refill_subscribers={len(self._subscribers[events.EventType.REFILL])}"
        )
