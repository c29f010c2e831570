"""
quantum-start: step through small quantum circuits one gate at a time.

Features:
- Exact state-vector simulation for 2 to 8 qubits
- Gate set: H, X, Y, Z, S, T, CNOT, CZ
- Replay to any step of a circuit, no hidden mutable state
- Collect-all circuit validation
- Bloch vector of any single qubit, including entangled ones

Quick Start:
    >>> from quantum_start import single_qubit_gate, two_qubit_gate
    >>> from quantum_start import get_state_after_step, to_ket_string
    >>> bell = (single_qubit_gate("H", 0), two_qubit_gate("CNOT", 0, 1))
    >>> state = get_state_after_step(bell, 2, 1)
    >>> print(to_ket_string(state))
    (0.7071067811865475)|00⟩ + (0.7071067811865475)|11⟩
"""
__version__ = "0.1.0"

# Circuit model
from .circuit import (
    GATE_TYPES,
    MAX_QUBITS,
    MIN_QUBITS,
    Circuit,
    Gate,
    single_qubit_gate,
    two_qubit_gate,
)
from .validation import (
    DuplicateQubitError,
    GateTargetError,
    QubitCountError,
    ValidationError,
    is_circuit_valid,
    validate_circuit,
)

# Core simulation
from .core import (
    BlochVector,
    ReplayCache,
    UnknownGateError,
    apply_gate,
    get_all_steps,
    get_probabilities,
    get_state_after_step,
    initial_state,
    reduced_density_matrix,
    state_to_bloch_vector,
    to_ket_string,
    gates,
)

# Visualization
from .visualization import draw_circuit, show_bloch, show_probabilities, show_state

from .editor import EditorState

__all__ = [
    # Circuit
    'GATE_TYPES',
    'MIN_QUBITS',
    'MAX_QUBITS',
    'Circuit',
    'Gate',
    'single_qubit_gate',
    'two_qubit_gate',
    # Validation
    'ValidationError',
    'QubitCountError',
    'GateTargetError',
    'DuplicateQubitError',
    'validate_circuit',
    'is_circuit_valid',
    # Core
    'initial_state',
    'get_probabilities',
    'to_ket_string',
    'apply_gate',
    'UnknownGateError',
    'get_state_after_step',
    'get_all_steps',
    'ReplayCache',
    'BlochVector',
    'reduced_density_matrix',
    'state_to_bloch_vector',
    'gates',
    # Visualization
    'draw_circuit',
    'show_state',
    'show_probabilities',
    'show_bloch',
    # Editor
    'EditorState',
]
