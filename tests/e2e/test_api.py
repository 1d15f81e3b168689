"""
Tests end-to-end de l'API Flask.

Ces tests vérifient le flux complet :
HTTP request → Flask → PublishSubscribeService → Subscribers → Machines

On injecte dans le module une simulation neuve à chaque test,
avec deux distributeurs et un seul subscriber de vente.
"""

import importlib

import pytest
from pydantic import ValidationError

from vending.adapters.repository import MachineCollection
from vending.config import get_settings
from vending.domain.events import EventType
from vending.domain.model import Machine
from vending.entrypoints.flask_app import app
from vending.service_layer import bootstrap


@pytest.fixture
def simulation():
    return bootstrap.bootstrap(
        machines=MachineCollection([Machine("001"), Machine("002")]),
        sale_subscribers=1,
    )


@pytest.fixture
def client(simulation):
    """Client de test Flask avec la simulation injectée."""
    import vending.entrypoints.flask_app as flask_module

    original = flask_module.simulation
    flask_module.simulation = simulation
    app.config["TESTING"] = True

    with app.test_client() as client:
        yield client

    flask_module.simulation = original


class TestSale:
    def test_vente(self, client):
        response = client.post("/sale", json={"machine_id": "001", "qty": 3})

        assert response.status_code == 201
        assert response.get_json()["stock_level"] == 7

    def test_vente_distributeur_inconnu_retourne_404(self, client):
        response = client.post("/sale", json={"machine_id": "999", "qty": 3})

        assert response.status_code == 404
        assert "Distributeur inconnu" in response.get_json()["message"]

    def test_body_incomplet_retourne_400(self, client):
        response = client.post("/sale", json={"machine_id": "001"})
        assert response.status_code == 400

    @pytest.mark.parametrize("qty", ["beaucoup", "3", 2.9, True, None])
    def test_quantité_non_entière_retourne_400(self, client, qty):
        response = client.post("/sale", json={"machine_id": "001", "qty": qty})

        assert response.status_code == 400
        assert client.get("/machines/001").get_json()["stock_level"] == 10

    def test_body_non_objet_retourne_400(self, client):
        response = client.post("/sale", json=[1, 2])
        assert response.status_code == 400


class TestRefill:
    def test_réapprovisionnement(self, client):
        response = client.post("/refill", json={"machine_id": "002", "qty": 5})

        assert response.status_code == 201
        assert response.get_json()["stock_level"] == 15


class TestWarnings:
    def test_alerte_puis_réassort(self, client):
        client.post("/sale", json={"machine_id": "001", "qty": 8})

        response = client.get("/warnings")
        assert response.get_json() == [{"type": "low", "machine_id": "001"}]

        response = client.post("/warnings/publish")
        assert response.status_code == 200
        assert response.get_json() == {"published": 1}

        response = client.get("/machines/001")
        assert response.get_json()["stock_level"] == 10
        assert client.get("/warnings").get_json() == []

    def test_rien_à_republier(self, client):
        response = client.post("/warnings/publish")
        assert response.get_json() == {"published": 0}


class TestMachinesView:
    def test_liste_des_distributeurs(self, client):
        response = client.get("/machines")

        assert response.status_code == 200
        assert [m["id"] for m in response.get_json()] == ["001", "002"]

    def test_distributeur_inexistant_retourne_404(self, client):
        response = client.get("/machines/999")
        assert response.status_code == 404


class TestDémarrage:
    """Le module construit sa simulation à l'import, à partir de la configuration."""

    def test_simulation_construite_depuis_la_configuration(self, monkeypatch):
        import vending.entrypoints.flask_app as flask_module

        monkeypatch.setenv("VENDING_SALE_SUBSCRIBERS", "2")
        try:
            importlib.reload(flask_module)
            abonnés = flask_module.simulation.pubsub.subscribers(EventType.SALE)
            assert len(abonnés) == 2
            assert [m.id for m in flask_module.simulation.machines] == ["001", "002", "003"]
        finally:
            monkeypatch.delenv("VENDING_SALE_SUBSCRIBERS")
            get_settings.cache_clear()
            importlib.reload(flask_module)

    def test_configuration_invalide_refusée_à_l_import(self, monkeypatch):
        import vending.entrypoints.flask_app as flask_module

        monkeypatch.setenv("VENDING_SALE_SUBSCRIBERS", "quatre")
        try:
            with pytest.raises(ValidationError, match="sale_subscribers"):
                importlib.reload(flask_module)
        finally:
            monkeypatch.delenv("VENDING_SALE_SUBSCRIBERS")
            get_settings.cache_clear()
            importlib.reload(flask_module)
