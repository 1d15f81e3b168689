"""
Adapter pour la boîte d'envoi des events d'alerte.

Les subscribers de vente et de réapprovisionnement n'émettent pas
eux-mêmes les events d'alerte : ils les déposent dans une outbox
injectée à la construction. C'est l'appelant qui vide l'outbox et
republie son contenu dans le service de publication.
"""

from __future__ import annotations

import abc
import logging
from typing import Iterator

from vending.domain import events

logger = logging.getLogger(__name__)


class AbstractOutbox(abc.ABC):
    """Interface abstraite d'un puits d'events en ajout seul."""

    @abc.abstractmethod
    def append(self, event: events.WarningEvent) -> None:
        raise NotImplementedError


class InMemoryOutbox(AbstractOutbox):
    """Outbox en mémoire, partagée par référence entre les subscribers."""

    def __init__(self) -> None:
        self._events: list[events.WarningEvent] = []

    def append(self, event: events.WarningEvent) -> None:
        logger.debug("Event ajouté à l'outbox : %s", event)
        self._events.append(event)

    @property
    def events(self) -> tuple[events.WarningEvent, ...]:
        return tuple(self._events)

    def drain(self) -> Iterator[events.WarningEvent]:
        """
        Vide l'outbox en rendant les events dans l'ordre d'arrivée.

        Un event ajouté pendant l'itération (par un handler déclenché
        lors de sa republication) est rendu lui aussi.
        """
        while self._events:
            yield self._events.pop(0)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[events.WarningEvent]:
        return iter(self._events)
