"""Tests for state vector helpers and ket formatting."""

import logging

import numpy as np
import pytest

from quantum_start.core import complex_math as cm
from quantum_start.core.statevector import (
    get_probabilities,
    initial_state,
    num_qubits,
    to_ket_string,
)

S2 = 1 / np.sqrt(2)


# ---------------------------------------------------------------------------
# Complex arithmetic
# ---------------------------------------------------------------------------

class TestComplexMath:

    def test_scalar_ops(self):
        a, b = 1 + 2j, 3 - 1j
        assert cm.add(a, b) == 4 + 1j
        assert cm.sub(a, b) == -2 + 3j
        assert cm.mul(a, b) == 5 + 5j
        assert cm.scale(2.0, a) == 2 + 4j
        assert cm.conj(a) == 1 - 2j
        assert cm.norm_sq(a) == pytest.approx(5.0)

    def test_elementwise_on_arrays(self):
        z = np.array([1j, 3 + 4j], dtype=np.complex128)
        np.testing.assert_allclose(cm.norm_sq(z), [1.0, 25.0])
        np.testing.assert_array_equal(cm.conj(z), [-1j, 3 - 4j])
        np.testing.assert_array_equal(cm.mul(z, 1j), [-1, -4 + 3j])

    def test_inputs_unchanged(self):
        z = np.array([1 + 1j], dtype=np.complex128)
        cm.conj(z)
        cm.scale(3.0, z)
        assert z[0] == 1 + 1j


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("n", range(2, 9))
def test_initial_state(n):
    state = initial_state(n)
    assert state.shape == (2 ** n,)
    assert state.dtype == np.complex128
    assert state[0] == 1 + 0j
    assert np.count_nonzero(state) == 1


@pytest.mark.parametrize("n", [0, 1, 9])
def test_initial_state_out_of_range(n):
    with pytest.raises(ValueError):
        initial_state(n)


def test_initial_states_are_independent():
    a = initial_state(2)
    a[0] = 0
    assert initial_state(2)[0] == 1


def test_num_qubits():
    assert num_qubits(np.zeros(8)) == 3
    with pytest.raises(ValueError):
        num_qubits(np.zeros(6))


# ---------------------------------------------------------------------------
# Probabilities
# ---------------------------------------------------------------------------

def test_probabilities_index_order():
    state = np.array([S2, 0, 0, -1j * S2])
    np.testing.assert_allclose(get_probabilities(state), [0.5, 0, 0, 0.5], atol=1e-15)


def test_probabilities_length_matches_state():
    assert len(get_probabilities(initial_state(5))) == 32


# ---------------------------------------------------------------------------
# Ket strings
# ---------------------------------------------------------------------------

class TestKetString:

    def test_initial_state(self):
        assert to_ket_string(initial_state(2)) == "|00⟩"

    def test_basis_is_msb_first(self):
        state = np.zeros(4, dtype=np.complex128)
        state[1] = 1  # qubit 0 set
        assert to_ket_string(state) == "|01⟩"

    def test_unit_tokens(self):
        state = np.array([0, -1, 0, 0], dtype=np.complex128)
        assert to_ket_string(state) == "(-1)|01⟩"
        state = np.array([0, 0, 1j, 0])
        assert to_ket_string(state) == "(i)|10⟩"
        state = np.array([0, 0, 0, -1j])
        assert to_ket_string(state) == "(-i)|11⟩"

    def test_superposition_terms(self):
        state = np.array([S2, 0, 0, S2], dtype=np.complex128)
        assert to_ket_string(state) == (
            "(0.7071067811865475)|00⟩ + (0.7071067811865475)|11⟩"
        )

    def test_imaginary_only_coefficient(self):
        state = np.array([np.sqrt(0.75), 0.5j, 0, 0])
        assert to_ket_string(state).endswith("(0.5i)|01⟩")

    def test_combined_form(self):
        state = np.array([0.5 + 0.5j, 0.5 - 0.5j, 0, 0])
        assert to_ket_string(state) == "(0.5 + 0.5i)|00⟩ + (0.5 - 0.5i)|01⟩"

    def test_threshold_drops_small_terms(self):
        state = np.array([np.sqrt(0.99), np.sqrt(0.01), 0, 0], dtype=np.complex128)
        assert "|01⟩" in to_ket_string(state)
        assert "|01⟩" not in to_ket_string(state, threshold=0.05)

    def test_zero_vector_falls_back_to_ground(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert to_ket_string(np.zeros(8, dtype=np.complex128)) == "|000⟩"
        assert "No basis state above threshold" in caplog.text

    def test_small_coefficient_is_positional(self):
        state = np.array([np.sqrt(1 - 4e-10), 2e-5, 0, 0], dtype=np.complex128)
        assert to_ket_string(state).endswith("(0.00002)|01⟩")
        state = np.array([np.sqrt(1 - 4e-10), 2e-5j, 0, 0])
        assert to_ket_string(state).endswith("(0.00002i)|01⟩")

    def test_non_power_of_two(self):
        assert to_ket_string(np.ones(3)) == "|?⟩"
