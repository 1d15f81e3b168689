"""
Configuration partagée pour les tests.

Les fixtures construisent une collection de trois distributeurs
au stock par défaut et une outbox vide, partagées par les
subscribers créés dans chaque test.
"""

import pytest

from vending.adapters.outbox import InMemoryOutbox
from vending.config import get_settings
from vending.adapters.repository import MachineCollection
from vending.domain.model import Machine


@pytest.fixture
def machines():
    return MachineCollection([Machine("001"), Machine("002"), Machine("003")])


@pytest.fixture
def outbox():
    return InMemoryOutbox()


@pytest.fixture(autouse=True)
def config_par_défaut(monkeypatch):
    """Isole les tests des variables d'environnement de la machine."""
    for variable in (
        "VENDING_MACHINE_IDS",
        "VENDING_SALE_SUBSCRIBERS",
        "VENDING_LOG_LEVEL",
        "VENDING_SEED",
    ):
        monkeypatch.delenv(variable, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
