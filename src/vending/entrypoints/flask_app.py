"""
Point d'entrée Flask.

L'API Flask est un thin adapter : elle convertit les requêtes HTTP
en events, les publie dans le service de publication en mémoire,
et convertit l'état résultant en réponses HTTP.

Les subscribers restent appelés en synchrone, dans le processus :
l'API n'est qu'une autre façon pour un appelant de publier.
"""

from __future__ import annotations

from flask import Flask, jsonify, request

from vending.domain import events, model
from vending.service_layer import bootstrap
from vending.views import views


app = Flask(__name__)
simulation = bootstrap.bootstrap()


def _lire_event(event_class):
    """Construit un event à partir du body JSON { machine_id, qty }."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    machine_id = data.get("machine_id")
    qty = data.get("qty")
    # Une quantité est un entier JSON : ni flottant, ni booléen, ni chaîne.
    if not isinstance(machine_id, str) or isinstance(qty, bool) or not isinstance(qty, int):
        return None
    return event_class(machine_id, qty)


def _publier(event):
    if event is None:
        return jsonify({"message": "Body attendu : { machine_id, qty }"}), 400
    try:
        simulation.pubsub.publish(event)
    except model.UnknownMachine as e:
        return jsonify({"message": str(e)}), 404
    machine = simulation.machines.get(event.machine_id)
    return jsonify({"stock_level": machine.stock_level}), 201


@app.route("/sale", methods=["POST"])
def sale_endpoint():
    """
    POST /sale
    Body JSON : { machine_id, qty }

    Publie une vente. Retourne le stock du distributeur après traitement.
    """
    return _publier(_lire_event(events.SaleEvent))


@app.route("/refill", methods=["POST"])
def refill_endpoint():
    """
    POST /refill
    Body JSON : { machine_id, qty }

    Publie un réapprovisionnement.
    """
    return _publier(_lire_event(events.RefillEvent))


@app.route("/warnings", methods=["GET"])
def warnings_view_endpoint():
    return jsonify(views.pending_warnings(simulation.outbox)), 200


@app.route("/warnings/publish", methods=["POST"])
def publish_warnings_endpoint():
    """
    POST /warnings/publish

    Vide l'outbox et republie les events d'alerte en attente.
    """
    publiés = simulation.publish_warnings()
    return jsonify({"published": publiés}), 200


@app.route("/machines", methods=["GET"])
def machines_view_endpoint():
    return jsonify(views.machines(simulation.machines)), 200


@app.route("/machines/<machine_id>", methods=["GET"])
def machine_view_endpoint(machine_id: str):
    result = views.machine(simulation.machines, machine_id)
    if result is None:
        return "not found", 404
    return jsonify(result), 200
