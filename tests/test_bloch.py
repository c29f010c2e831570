"""Tests for the Bloch projector."""

import math

import numpy as np
import pytest

from quantum_start.circuit import single_qubit_gate, two_qubit_gate
from quantum_start.core.bloch import BlochVector, reduced_density_matrix, state_to_bloch_vector
from quantum_start.core.replay import get_state_after_step
from quantum_start.core.statevector import initial_state


def state_of(gates, n=2):
    return get_state_after_step(tuple(gates), n, len(gates) - 1)


class TestAxes:

    def test_ground_state_is_north_pole(self):
        v = state_to_bloch_vector(initial_state(2), 2, 0)
        assert (v.x, v.y, v.z) == pytest.approx((0, 0, 1))
        assert v.is_pure

    def test_x_gives_south_pole(self):
        v = state_to_bloch_vector(state_of([single_qubit_gate("X", 1)]), 2, 1)
        assert v.z == pytest.approx(-1)

    def test_hadamard_gives_plus_x(self):
        v = state_to_bloch_vector(state_of([single_qubit_gate("H", 0)]), 2, 0)
        assert (v.x, v.y, v.z) == pytest.approx((1, 0, 0), abs=1e-12)
        assert v.length == pytest.approx(1)
        assert v.is_pure

    def test_s_after_h_gives_plus_y(self):
        v = state_to_bloch_vector(
            state_of([single_qubit_gate("H", 0), single_qubit_gate("S", 0)]), 2, 0
        )
        assert (v.x, v.y, v.z) == pytest.approx((0, 1, 0), abs=1e-12)

    def test_untouched_qubit_stays_at_zero(self):
        v = state_to_bloch_vector(state_of([single_qubit_gate("H", 0)]), 2, 1)
        assert (v.x, v.y, v.z) == pytest.approx((0, 0, 1))


class TestEntanglement:

    @pytest.mark.parametrize("qubit", [0, 1])
    def test_bell_pair_is_maximally_mixed(self, qubit):
        bell = state_of([single_qubit_gate("H", 0), two_qubit_gate("CNOT", 0, 1)])
        v = state_to_bloch_vector(bell, 2, qubit)
        assert v.length == pytest.approx(0, abs=1e-12)
        assert not v.is_pure

    def test_partial_entanglement_shortens_vector(self):
        # Ry-like preparation from H·T·H, then CNOT
        state = state_of([
            single_qubit_gate("H", 0), single_qubit_gate("T", 0),
            single_qubit_gate("H", 0), two_qubit_gate("CNOT", 0, 1),
        ])
        v = state_to_bloch_vector(state, 2, 1)
        assert 0 < v.length < 1
        assert not v.is_pure


class TestDensityMatrix:

    def test_hermitian_unit_trace(self):
        rng = np.random.default_rng(11)
        psi = rng.normal(size=16) + 1j * rng.normal(size=16)
        psi /= np.linalg.norm(psi)
        for q in range(4):
            rho = reduced_density_matrix(psi, q)
            np.testing.assert_allclose(rho, rho.conj().T, atol=1e-12)
            assert np.trace(rho).real == pytest.approx(1.0)

    def test_matches_dense_partial_trace(self):
        rng = np.random.default_rng(5)
        psi = rng.normal(size=8) + 1j * rng.normal(size=8)
        psi /= np.linalg.norm(psi)
        # reshape to (q2, q1, q0) and trace out q2 and q0
        t = psi.reshape(2, 2, 2)
        expected = np.einsum("aib,ajb->ij", t, t.conj())
        np.testing.assert_allclose(reduced_density_matrix(psi, 1), expected, atol=1e-12)

    def test_length_never_exceeds_one(self):
        rng = np.random.default_rng(2)
        psi = rng.normal(size=32) + 1j * rng.normal(size=32)
        psi /= np.linalg.norm(psi)
        for q in range(5):
            assert state_to_bloch_vector(psi, 5, q).length <= 1 + 1e-12


@pytest.mark.parametrize("qubit", [-1, 2])
def test_qubit_out_of_range(qubit):
    with pytest.raises(ValueError):
        state_to_bloch_vector(initial_state(2), 2, qubit)


class TestBlochVector:

    def test_angles(self):
        v = BlochVector(x=0.0, y=1.0, z=0.0, length=1.0, is_pure=True)
        theta, phi = v.angles()
        assert theta == pytest.approx(math.pi / 2)
        assert phi == pytest.approx(math.pi / 2)

    def test_angles_of_zero_vector(self):
        assert BlochVector(0.0, 0.0, 0.0, 0.0, False).angles() == (0.0, 0.0)

    def test_to_dict(self):
        v = BlochVector(1.0, 0.0, 0.0, 1.0, True)
        assert v.to_dict() == {"x": 1.0, "y": 0.0, "z": 0.0, "length": 1.0, "is_pure": True}
