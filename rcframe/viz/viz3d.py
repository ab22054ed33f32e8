# rcframe/viz/viz3d.py
"""
3D VISUALIZATION: Interactive Building Frame Viewer
===================================================

PURPOSE:
--------
Interactive Plotly figures of a frame model:
- Columns and beams as separate, toggleable traces
- Fixed (ground) nodes highlighted
- Optional deflected shape, scaled so it is visible next to the model
- Export to HTML for sharing

Camera state (rotation, zoom, pan) lives entirely in the Plotly figure;
nothing is fed back into the solver.
"""

import logging
import os
from typing import Mapping, Optional

import numpy as np
import plotly.graph_objects as go

from ..post import NodeDisplacement
from ..v3d.model import FrameModel

_logger = logging.getLogger(__name__)

KIND_STYLE = {
    'column': dict(color='firebrick', width=6),
    'beam': dict(color='steelblue', width=4),
}


def _segments(model: FrameModel, kind: str, offsets: Optional[Mapping[int, np.ndarray]] = None):
    xs, ys, zs, texts = [], [], [], []
    for e in model.elements:
        if e.kind != kind:
            continue
        for nid in (e.ni, e.nj):
            n = model.nodes[nid]
            dx, dy, dz = offsets[nid] if offsets is not None else (0.0, 0.0, 0.0)
            xs.append(n.x + dx)
            ys.append(n.y + dy)
            zs.append(n.z + dz)
            texts.append(e.label or f"{kind} {e.id}")
        # None breaks the line between members
        xs.append(None)
        ys.append(None)
        zs.append(None)
        texts.append(None)
    return xs, ys, zs, texts


def auto_deflection_scale(model: FrameModel, displacements: Mapping[int, NodeDisplacement]) -> float:
    """Scale that draws the largest translation at 10% of the model size."""
    coords = np.array([[n.x, n.y, n.z] for n in model.nodes.values()])
    extent = float(np.ptp(coords, axis=0).max()) if len(coords) else 1.0
    max_u = max(
        (float(np.linalg.norm(d.as_array()[:3])) for d in displacements.values()),
        default=0.0,
    )
    if max_u <= 0.0:
        return 1.0
    return 0.1 * max(extent, 1.0) / max_u


def create_frame_figure(
    model: FrameModel,
    displacements: Optional[Mapping[int, NodeDisplacement]] = None,
    scale: Optional[float] = None,
    title: str = "Building Frame",
    show_nodes: bool = True,
    show_supports: bool = True,
) -> go.Figure:
    """
    Create a Plotly figure of a frame model.

    Parameters:
    -----------
    model : FrameModel
        The model to draw

    displacements : Optional[Mapping[int, NodeDisplacement]]
        If given (e.g. AnalysisResult.displacements), the deflected shape
        is overlaid as a dashed trace

    scale : Optional[float]
        Deflection magnification; chosen automatically when None

    title : str
        Plot title

    show_nodes : bool
        Whether to show node markers

    show_supports : bool
        Whether to highlight fixed nodes

    Returns:
    --------
    go.Figure
    """
    fig = go.Figure()

    for kind, style in KIND_STYLE.items():
        xs, ys, zs, texts = _segments(model, kind)
        if not xs:
            continue
        fig.add_trace(go.Scatter3d(
            x=xs, y=ys, z=zs,
            mode='lines',
            line=style,
            name=kind.capitalize() + 's',
            text=texts,
            hoverinfo='text',
        ))

    if show_nodes and model.nodes:
        nodes = list(model.nodes.values())
        if show_supports:
            colors = ['black' if n.fixed else 'darkgray' for n in nodes]
            sizes = [7 if n.fixed else 3 for n in nodes]
        else:
            colors, sizes = 'darkgray', 3
        fig.add_trace(go.Scatter3d(
            x=[n.x for n in nodes], y=[n.y for n in nodes], z=[n.z for n in nodes],
            mode='markers',
            marker=dict(size=sizes, color=colors, symbol='square' if show_supports else 'circle'),
            name='Nodes',
            text=[f"Node {n.id}: ({n.x:.2f}, {n.y:.2f}, {n.z:.2f})" for n in nodes],
            hoverinfo='text',
        ))

    if displacements is not None:
        if scale is None:
            scale = auto_deflection_scale(model, displacements)
        offsets = {nid: d.as_array()[:3] * scale for nid, d in displacements.items()}
        for kind in KIND_STYLE:
            xs, ys, zs, texts = _segments(model, kind, offsets)
            if not xs:
                continue
            fig.add_trace(go.Scatter3d(
                x=xs, y=ys, z=zs,
                mode='lines',
                line=dict(color='orange', width=3, dash='dash'),
                name=f'Deflected {kind}s (x{scale:.0f})',
                hoverinfo='skip',
            ))

    fig.update_layout(
        title=dict(text=title, font=dict(size=16)),
        scene=dict(
            xaxis=dict(title='X (m)'),
            yaxis=dict(title='Y (m)'),
            zaxis=dict(title='Z (m)'),
            aspectmode='data',
            camera=dict(eye=dict(x=1.5, y=1.5, z=1.0)),
        ),
        showlegend=True,
        legend=dict(x=0.02, y=0.98),
        margin=dict(l=0, r=0, t=40, b=0),
    )

    return fig


def plot_frame_3d(
    model: FrameModel,
    displacements: Optional[Mapping[int, NodeDisplacement]] = None,
    outpath: Optional[str] = None,
    show: bool = True,
    **kwargs
) -> go.Figure:
    """
    Create and optionally display/save a frame figure.

    Example:
    --------
    >>> fig = plot_frame_3d(model, result.displacements,
    ...                     outpath="artifacts/frame.html", show=False)
    """
    fig = create_frame_figure(model, displacements, **kwargs)

    if outpath:
        os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)
        fig.write_html(outpath)
        _logger.info(f"3D visualization saved to: {outpath}")

    if show:
        fig.show()

    return fig
