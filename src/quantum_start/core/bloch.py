"""
Bloch sphere projection for one qubit of a multi-qubit state.

The qubit's 2x2 reduced density matrix is obtained by partial trace over the
other qubits, then read off as a real 3-vector:

    x = 2 Re ρ01,  y = -2 Im ρ01,  z = 2 ρ00 - 1

A product state gives length 1. Entanglement with the rest of the register
shortens the vector; a Bell pair gives length 0 on both qubits.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass

import numpy as np
from numpy import ndarray

from quantum_start.core.complex_math import conj, mul, norm_sq

PURITY_THRESHOLD = 0.99
"""Bloch length above which the reduced state is reported as pure."""


@dataclass(frozen=True)
class BlochVector:
    """Bloch coordinates of one qubit plus the vector length and purity flag."""
    x: float
    y: float
    z: float
    length: float
    is_pure: bool

    def angles(self) -> tuple[float, float]:
        """Polar angle θ and azimuth φ in radians."""
        if self.length == 0:
            return (0.0, 0.0)
        theta = math.acos(max(-1.0, min(1.0, self.z / self.length)))
        phi = math.atan2(self.y, self.x)
        return (theta, phi)

    def to_dict(self) -> dict:
        return asdict(self)


def reduced_density_matrix(state: ndarray, qubit_index: int) -> ndarray:
    """
    2x2 reduced density matrix of one qubit.

    For every index i with bit ``qubit_index`` clear and j = i with the bit
    set: ρ00 += |a_i|², ρ11 += |a_j|², ρ01 += a_i·conj(a_j). ρ10 is the
    conjugate of ρ01, so the result is Hermitian by construction.
    """
    state = np.asarray(state, dtype=np.complex128)
    bit = 1 << qubit_index
    idx = np.arange(len(state))
    i = idx[(idx & bit) == 0]
    j = i | bit

    rho00 = float(np.sum(norm_sq(state[i])))
    rho11 = float(np.sum(norm_sq(state[j])))
    rho01 = complex(np.sum(mul(state[i], conj(state[j]))))

    return np.array(
        [[rho00, rho01], [conj(rho01), rho11]], dtype=np.complex128
    )


def state_to_bloch_vector(
    state: ndarray, qubit_count: int, qubit_index: int
) -> BlochVector:
    """
    Project one qubit of ``state`` onto the Bloch sphere.

    Raises
    ------
    ValueError
        If ``qubit_index`` is not in [0, qubit_count).
    """
    if not 0 <= qubit_index < qubit_count:
        raise ValueError(
            f"Qubit {qubit_index} out of range for {qubit_count}-qubit state"
        )
    rho = reduced_density_matrix(state, qubit_index)
    x = 2 * rho[0, 1].real
    y = -2 * rho[0, 1].imag
    z = 2 * rho[0, 0].real - 1
    length = math.sqrt(x * x + y * y + z * z)
    return BlochVector(
        x=float(x), y=float(y), z=float(z), length=length, is_pure=length > PURITY_THRESHOLD
    )
