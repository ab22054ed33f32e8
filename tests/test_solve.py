# File: tests/test_solve.py
"""
TEST: Solver Failure Modes and Result Contract
==============================================

A solver that prints garbage displacements for an unstable model is worse
than one that refuses. These tests check that:

1. An empty model is a trivial success, not an error
2. An isolated free node is reported as SingularSystemError
3. An unsupported structure is reported as SingularSystemError
4. NaN/Inf are reported as NumericFailure
5. Oversized models are rejected before K is allocated
6. Results cannot be modified by the caller
"""

import logging

import numpy as np
import pytest

from rcframe import (
    NodalLoad,
    NumericFailure,
    SingularSystemError,
    SolverConfig,
    ValidationError,
    analyze,
    solve_linear,
)
from rcframe.v3d import Frame3D, Node3D, make_model

PROPS = dict(E=3.0e7, G=1.25e7, A=0.16, Iy=2e-3, Iz=2e-3, J=3e-3)


def cantilever_nodes():
    return [Node3D(0, 0.0, 0.0, 0.0, fixed=True), Node3D(1, 0.0, 0.0, 3.0)]


def test_empty_model_is_trivial_success():
    model = make_model([], [])
    result = analyze(model, [])

    assert result.ok
    assert result.d.shape == (0,)
    assert len(result.displacements) == 0


def test_only_fixed_nodes_is_trivial_success():
    model = make_model([Node3D(0, 0.0, 0.0, 0.0, fixed=True)], [])
    result = analyze(model, [])

    assert result.ok
    np.testing.assert_array_equal(result.displacements[0].as_array(), np.zeros(6))


def test_isolated_node_is_singular():
    nodes = cantilever_nodes() + [Node3D(2, 5.0, 0.0, 3.0)]
    model = make_model(nodes, [Frame3D(0, 'column', 0, 1, **PROPS)])

    result = analyze(model, [NodalLoad(1, 'fx', 10.0)])

    assert not result.ok
    assert isinstance(result.error, SingularSystemError)
    assert result.error.dof == model.nodes[2].dofs[0]
    assert result.d is None
    assert len(result.displacements) == 0


def test_unsupported_structure_is_singular():
    nodes = [Node3D(0, 0.0, 0.0, 0.0), Node3D(1, 0.0, 0.0, 3.0)]
    model = make_model(nodes, [Frame3D(0, 'column', 0, 1, **PROPS)])

    result = analyze(model, [NodalLoad(1, 'fx', 10.0)])

    assert not result.ok
    assert isinstance(result.error, SingularSystemError)


def test_failed_result_has_no_member_forces():
    nodes = [Node3D(0, 0.0, 0.0, 0.0), Node3D(1, 0.0, 0.0, 3.0)]
    model = make_model(nodes, [Frame3D(0, 'column', 0, 1, **PROPS)])
    result = analyze(model, [])

    with pytest.raises(SingularSystemError):
        result.member_forces(model)


def test_nan_load_vector_is_numeric_failure():
    model = make_model(cantilever_nodes(), [Frame3D(0, 'column', 0, 1, **PROPS)])
    F = np.zeros(model.ndof)
    F[0] = np.nan

    result = analyze(model, F)

    assert not result.ok
    assert isinstance(result.error, NumericFailure)


def test_wrong_load_vector_size():
    model = make_model(cantilever_nodes(), [Frame3D(0, 'column', 0, 1, **PROPS)])
    with pytest.raises(ValidationError):
        analyze(model, np.zeros(model.ndof + 1))


def test_oversized_model_rejected():
    model = make_model(cantilever_nodes(), [Frame3D(0, 'column', 0, 1, **PROPS)])
    with pytest.raises(ValidationError, match="max_dof"):
        analyze(model, [], config=SolverConfig(max_dof=5, warn_dof=5))


def test_large_model_warns(caplog):
    model = make_model(cantilever_nodes(), [Frame3D(0, 'column', 0, 1, **PROPS)])
    with caplog.at_level(logging.WARNING, logger='rcframe.analysis'):
        result = analyze(model, [NodalLoad(1, 'fx', 10.0)],
                         config=SolverConfig(max_dof=100, warn_dof=3))

    assert result.ok
    assert "Large model: 6 DOFs" in caplog.text


def test_model_below_warn_limit_is_quiet(caplog):
    model = make_model(cantilever_nodes(), [Frame3D(0, 'column', 0, 1, **PROPS)])
    with caplog.at_level(logging.WARNING, logger='rcframe.analysis'):
        analyze(model, [NodalLoad(1, 'fx', 10.0)], config=SolverConfig(max_dof=100, warn_dof=6))

    assert "Large model" not in caplog.text


def test_result_is_read_only():
    model = make_model(cantilever_nodes(), [Frame3D(0, 'column', 0, 1, **PROPS)])
    result = analyze(model, [NodalLoad(1, 'fx', 10.0)])
    assert result.ok

    with pytest.raises(ValueError):
        result.d[0] = 1.0
    with pytest.raises(TypeError):
        result.displacements[1] = None
    with pytest.raises(AttributeError):
        result.displacements[1].ux = 0.0


class TestSolveLinear:

    def test_solves_spd_system(self):
        K = np.array([[4.0, 1.0], [1.0, 3.0]])
        F = np.array([1.0, 2.0])
        d = solve_linear(K, F)
        np.testing.assert_allclose(K @ d, F)

    def test_zero_row(self):
        K = np.diag([1.0, 0.0, 2.0])
        with pytest.raises(SingularSystemError) as info:
            solve_linear(K, np.ones(3))
        assert info.value.dof == 1

    def test_ill_conditioned(self):
        K = np.array([[1.0, 1.0], [1.0, 1.0 + 1e-14]])
        with pytest.raises(SingularSystemError, match="cond"):
            solve_linear(K, np.ones(2))

    def test_not_positive_definite(self):
        K = np.array([[1.0, 2.0], [2.0, 1.0]])
        with pytest.raises(SingularSystemError):
            solve_linear(K, np.ones(2))

    def test_infinite_stiffness(self):
        K = np.array([[np.inf, 0.0], [0.0, 1.0]])
        with pytest.raises(NumericFailure):
            solve_linear(K, np.ones(2))

    def test_empty(self):
        d = solve_linear(np.zeros((0, 0)), np.zeros(0))
        assert d.shape == (0,)
