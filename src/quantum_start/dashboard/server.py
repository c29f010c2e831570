"""
quantum-start Dashboard Server.

A Flask application exposing the simulation core as a JSON API for the
circuit editor, step navigation and Bloch sphere surfaces:
- Circuit validation
- State at a step, or at every step
- Bloch vector of one qubit
- Editor commands over a serialized editor state

Usage:
    from quantum_start.dashboard import launch
    launch(port=8888)

    # Or via CLI:
    # quantum-start serve --port 8888
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import numpy as np

from quantum_start import editor
from quantum_start.circuit import (
    MIN_QUBITS,
    circuit_from_list,
    gate_from_dict,
)
from quantum_start.core import (
    get_all_steps,
    get_probabilities,
    get_state_after_step,
    state_to_bloch_vector,
    to_ket_string,
)
from quantum_start.validation import is_integer, validate_circuit

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Gate metadata for the frontend
# ---------------------------------------------------------------------------

GATE_CATALOG = [
    {"type": "H", "label": "H", "n_qubits": 1,
     "description": "Hadamard: creates superposition"},
    {"type": "X", "label": "X", "n_qubits": 1,
     "description": "Pauli-X (NOT gate)"},
    {"type": "Y", "label": "Y", "n_qubits": 1,
     "description": "Pauli-Y gate"},
    {"type": "Z", "label": "Z", "n_qubits": 1,
     "description": "Pauli-Z (phase flip)"},
    {"type": "S", "label": "S", "n_qubits": 1,
     "description": "S gate (√Z)"},
    {"type": "T", "label": "T", "n_qubits": 1,
     "description": "T gate (π/8)"},
    {"type": "CNOT", "label": "CNOT", "n_qubits": 2,
     "description": "Controlled-NOT: flips target when control is |1⟩"},
    {"type": "CZ", "label": "CZ", "n_qubits": 2,
     "description": "Controlled-Z: phase -1 on |11⟩"},
]

PRESETS = {
    "bell_pair": {
        "name": "Bell Pair (Φ⁺)",
        "description": "Maximally entangled pair: |00⟩ + |11⟩",
        "n_qubits": 2,
        "gates": [
            {"type": "H", "targets": [0]},
            {"type": "CNOT", "targets": [1], "control": 0},
        ],
    },
    "flip_and_entangle": {
        "name": "Flip and Entangle",
        "description": "X then CNOT lands exactly on |11⟩",
        "n_qubits": 2,
        "gates": [
            {"type": "X", "targets": [0]},
            {"type": "CNOT", "targets": [1], "control": 0},
        ],
    },
    "ghz_3": {
        "name": "GHZ State (3 qubits)",
        "description": "Three-way entanglement: |000⟩ + |111⟩",
        "n_qubits": 3,
        "gates": [
            {"type": "H", "targets": [0]},
            {"type": "CNOT", "targets": [1], "control": 0},
            {"type": "CNOT", "targets": [2], "control": 0},
        ],
    },
    "superposition": {
        "name": "Uniform Superposition",
        "description": "All basis states equally likely",
        "n_qubits": 3,
        "gates": [
            {"type": "H", "targets": [0]},
            {"type": "H", "targets": [1]},
            {"type": "H", "targets": [2]},
        ],
    },
    "phase_kickback": {
        "name": "Phase Kickback",
        "description": "CZ on |+⟩|1⟩ flips the control to |−⟩",
        "n_qubits": 2,
        "gates": [
            {"type": "H", "targets": [0]},
            {"type": "X", "targets": [1]},
            {"type": "CZ", "targets": [1], "control": 0},
            {"type": "H", "targets": [0]},
        ],
    },
}


# ---------------------------------------------------------------------------
# Request parsing and payload helpers
# ---------------------------------------------------------------------------

class RequestError(ValueError):
    """Malformed request body."""


def _parse_circuit(data: Any, default_qubits: int = MIN_QUBITS):
    """Return (circuit, n_qubits) from {"n_qubits": n, "gates": [...]}."""
    if not isinstance(data, dict):
        raise RequestError("Request body must be a JSON object")
    gates = data.get("gates", [])
    if not isinstance(gates, list):
        raise RequestError("'gates' must be a list")
    try:
        circuit = circuit_from_list(gates)
    except ValueError as e:
        raise RequestError(str(e)) from None
    return circuit, data.get("n_qubits", default_qubits)


def _state_payload(state: np.ndarray, n_qubits: int) -> dict:
    """Everything the display surfaces need for one state."""
    probs = get_probabilities(state)
    return {
        "statevector": [[float(c.real), float(c.imag)] for c in state],
        "probabilities": [float(p) for p in probs],
        "ket": to_ket_string(state),
        "bloch": [
            state_to_bloch_vector(state, n_qubits, q).to_dict() for q in range(n_qubits)
        ],
    }


def _error_payload(errors) -> dict:
    return {"valid": not errors, "errors": [e.to_dict() for e in errors]}


def _simulate_steps(circuit, n_qubits: int) -> list:
    """State payload for the initial state and after every gate."""
    steps = []
    for i, state in enumerate(get_all_steps(circuit, n_qubits)):
        payload = _state_payload(state, n_qubits)
        payload["step_index"] = i - 1
        payload["gate"] = str(circuit[i - 1]) if i else "Initial |0⟩⊗n"
        steps.append(payload)
    return steps


_EDITOR_COMMANDS = {
    "set-qubit-count": lambda s, body: editor.set_qubit_count(s, int(body["n_qubits"])),
    "add-gate": lambda s, body: editor.add_gate(s, gate_from_dict(body["gate"])),
    "remove-gate": lambda s, body: editor.remove_gate(s, int(body["index"])),
    "move-gate": lambda s, body: editor.move_gate(s, int(body["from"]), int(body["to"])),
    "clear": lambda s, body: editor.clear_circuit(s),
    "next": lambda s, body: editor.go_next(s),
    "prev": lambda s, body: editor.go_prev(s),
    "start": lambda s, body: editor.go_to_start(s),
    "end": lambda s, body: editor.go_to_end(s),
}


# ---------------------------------------------------------------------------
# Flask Application
# ---------------------------------------------------------------------------

def create_app(config: Optional[Mapping[str, Any]] = None) -> Any:
    """Create and configure the Flask application."""
    try:
        from flask import Flask, jsonify, request
    except ImportError:
        raise ImportError(
            "Flask is required for the dashboard. Install it with:\n"
            "  pip install flask\n"
            "Or install quantum-start with dashboard extras:\n"
            "  pip install quantum-start[dashboard]"
        )

    app = Flask(__name__)
    app.json.sort_keys = False
    app.config['DEFAULT_QUBITS'] = MIN_QUBITS
    if config:
        app.config.update(config)

    def body() -> Any:
        data = request.get_json(silent=True)
        if data is None:
            raise RequestError("Request body must be JSON")
        return data

    def circuit_and_qubits():
        return _parse_circuit(body(), app.config['DEFAULT_QUBITS'])

    @app.errorhandler(RequestError)
    def handle_request_error(e):
        return jsonify({"error": str(e)}), 400

    # ---- Routes ----

    @app.route("/api/gates")
    def api_gates():
        return jsonify(GATE_CATALOG)

    @app.route("/api/presets")
    def api_presets():
        return jsonify(PRESETS)

    @app.route("/api/validate", methods=["POST"])
    def api_validate():
        circuit, n_qubits = circuit_and_qubits()
        return jsonify(_error_payload(validate_circuit(circuit, n_qubits)))

    @app.route("/api/state", methods=["POST"])
    def api_state():
        data = body()
        circuit, n_qubits = circuit_and_qubits()
        errors = validate_circuit(circuit, n_qubits)
        if errors:
            return jsonify(_error_payload(errors)), 400
        step = data.get("step", len(circuit) - 1)
        if not is_integer(step):
            raise RequestError("'step' must be an integer")
        state = get_state_after_step(circuit, n_qubits, step)
        payload = _state_payload(state, n_qubits)
        payload["step_index"] = min(step, len(circuit) - 1) if step >= 0 else -1
        return jsonify(payload)

    @app.route("/api/steps", methods=["POST"])
    def api_steps():
        circuit, n_qubits = circuit_and_qubits()
        errors = validate_circuit(circuit, n_qubits)
        if errors:
            return jsonify(_error_payload(errors)), 400
        return jsonify({"steps": _simulate_steps(circuit, n_qubits)})

    @app.route("/api/bloch", methods=["POST"])
    def api_bloch():
        data = body()
        circuit, n_qubits = circuit_and_qubits()
        errors = validate_circuit(circuit, n_qubits)
        if errors:
            return jsonify(_error_payload(errors)), 400
        qubit = data.get("qubit", 0)
        step = data.get("step", len(circuit) - 1)
        if not is_integer(qubit) or not is_integer(step):
            raise RequestError("'qubit' and 'step' must be integers")
        if not 0 <= qubit < n_qubits:
            raise RequestError(f"Qubit {qubit} out of range for {n_qubits} qubits")
        state = get_state_after_step(circuit, n_qubits, step)
        return jsonify(state_to_bloch_vector(state, n_qubits, qubit).to_dict())

    @app.route("/api/editor/<command>", methods=["POST"])
    def api_editor(command):
        handler = _EDITOR_COMMANDS.get(command)
        if handler is None:
            return jsonify({"error": f"Unknown editor command: {command}"}), 404
        data = body()
        if not isinstance(data, dict):
            raise RequestError("Request body must be a JSON object")
        try:
            state = editor.EditorState.from_dict(data.get("state", {}))
            new_state = handler(state, data)
        except (KeyError, TypeError, ValueError) as e:
            raise RequestError(f"Bad '{command}' request: {e}") from None
        logger.debug("Editor %s: %d -> %d gates", command,
                     len(state.circuit), len(new_state.circuit))
        return jsonify({
            "state": new_state.to_dict(),
            **_error_payload(editor.validation_errors(new_state)),
            "can_go_next": editor.can_go_next(new_state),
            "can_go_prev": editor.can_go_prev(new_state),
        })

    return app


def launch(port: int = 8888, host: str = "127.0.0.1", debug: bool = False):
    """
    Launch the quantum-start dashboard API.

    Parameters
    ----------
    port : int
        Port to serve on (default 8888).
    host : str
        Host address (default localhost).
    debug : bool
        Enable Flask debug mode and request logging.
    """
    app = create_app()

    if not debug:
        logging.getLogger('werkzeug').setLevel(logging.ERROR)

    url = f"http://{host}:{port}"
    print(f"""
╔══════════════════════════════════════════════════════╗
║              quantum-start ⚛ Dashboard API           ║
╠══════════════════════════════════════════════════════╣
║                                                      ║
║   API: {url:<45s} ║
║                                                      ║
║   Press Ctrl+C to stop the server.                   ║
╚══════════════════════════════════════════════════════╝
""")
    app.run(host=host, port=port, debug=debug)
