# rcframe/viz - Visualization Tools
"""
VIZ: Interactive 3D views of frame models and deflected shapes (Plotly).
"""

from .viz3d import plot_frame_3d, create_frame_figure

__all__ = ['plot_frame_3d', 'create_frame_figure']
