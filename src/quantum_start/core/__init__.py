"""Core simulation components."""
from .statevector import (
    DEFAULT_THRESHOLD,
    get_probabilities,
    initial_state,
    num_qubits,
    to_ket_string,
)
from .apply import (
    GateApplicationError,
    MissingControlError,
    UnknownGateError,
    apply_gate,
    apply_single_qubit_gate,
    apply_two_qubit_gate,
)
from .replay import ReplayCache, get_all_steps, get_state_after_step
from .bloch import PURITY_THRESHOLD, BlochVector, reduced_density_matrix, state_to_bloch_vector
from . import complex_math, gates

__all__ = [
    'DEFAULT_THRESHOLD',
    'PURITY_THRESHOLD',
    'initial_state',
    'num_qubits',
    'get_probabilities',
    'to_ket_string',
    'apply_gate',
    'apply_single_qubit_gate',
    'apply_two_qubit_gate',
    'GateApplicationError',
    'UnknownGateError',
    'MissingControlError',
    'get_state_after_step',
    'get_all_steps',
    'ReplayCache',
    'BlochVector',
    'reduced_density_matrix',
    'state_to_bloch_vector',
    'complex_math',
    'gates',
]
