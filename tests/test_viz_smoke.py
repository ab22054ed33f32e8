# File: tests/test_viz_smoke.py
"""
Smoke tests for the Plotly frame viewer: figures build, traces are named,
and nothing is written unless asked.
"""

import plotly.graph_objects as go

from rcframe import analyze
from rcframe.catalog import building_members
from rcframe.loads import story_lateral_loads
from rcframe.v3d import GridGeometry, build_frame_model
from rcframe.viz import create_frame_figure, plot_frame_3d
from rcframe.viz.viz3d import auto_deflection_scale


def make_solved_building():
    geometry = GridGeometry([4.0], [4.0], story_height=3.0, story_count=2)
    column, beam = building_members("C30", (0.4, 0.4), (0.3, 0.5))
    model = build_frame_model(geometry, column, beam)
    result = analyze(model, story_lateral_loads(model, [50.0, 100.0], geometry.story_height))
    return model, result


def test_model_figure_traces():
    model, _ = make_solved_building()
    fig = create_frame_figure(model)

    assert isinstance(fig, go.Figure)
    names = [trace.name for trace in fig.data]
    assert names == ['Columns', 'Beams', 'Nodes']


def test_deflected_shape_overlay():
    model, result = make_solved_building()
    fig = create_frame_figure(model, result.displacements, scale=100.0)

    names = [trace.name for trace in fig.data]
    assert 'Deflected columns (x100)' in names
    assert 'Deflected beams (x100)' in names


def test_auto_scale_positive():
    model, result = make_solved_building()
    assert auto_deflection_scale(model, result.displacements) > 1.0


def test_plot_writes_html(tmp_path):
    model, result = make_solved_building()
    out = tmp_path / "views" / "frame.html"

    plot_frame_3d(model, result.displacements, outpath=str(out), show=False)

    assert out.exists()
    assert out.stat().st_size > 0
