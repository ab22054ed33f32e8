#!/usr/bin/env python3
"""
RUN_RC_FRAME: Lateral Load Analysis of a Regular RC Building
============================================================

This demo walks through the whole pipeline:
1. Define the grid, stories and sections
2. Build the frame model (nodes, columns, beams)
3. Distribute story seismic forces onto the floor nodes
4. Solve for displacements
5. Print story drifts and the most loaded column
6. Optionally save an interactive 3D view

Run with:
    python demos/run_rc_frame.py --stories 4 --html artifacts/frame.html
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from rcframe import analyze
from rcframe.catalog import building_members
from rcframe.loads import story_lateral_loads
from rcframe.post import member_force_table, story_drift_table, story_drifts
from rcframe.v3d import GridGeometry, build_frame_model


def print_header(text: str):
    """Print a formatted section header."""
    print("\n" + "=" * 60)
    print(f"  {text}")
    print("=" * 60)


def main():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('--stories', type=int, default=4)
    parser.add_argument('--height', type=float, default=3.0, help='story height (m)')
    parser.add_argument('--concrete', default='C30')
    parser.add_argument('--base-shear', type=float, default=800.0, help='total base shear (kN)')
    parser.add_argument('--html', default=None, help='save a 3D view to this HTML file')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    # =========================================================================
    # STEP 1: GEOMETRY AND SECTIONS
    # =========================================================================
    print_header("STEP 1: Geometry and Sections")
    geometry = GridGeometry(
        x_spacings=[5.0, 4.0, 5.0],
        y_spacings=[6.0, 6.0],
        story_height=args.height,
        story_count=args.stories,
    )
    column, beam = building_members(args.concrete, column_size=(0.40, 0.50), beam_size=(0.30, 0.55))
    print(f"  Grid: {geometry.nx} x {geometry.ny} axes, {geometry.story_count} stories of {geometry.story_height} m")
    print(f"  Column: A={column.A:.3f} m², Iy={column.Iy:.2e} m⁴, Iz={column.Iz:.2e} m⁴")
    print(f"  Beam:   A={beam.A:.3f} m², Iy={beam.Iy:.2e} m⁴, Iz={beam.Iz:.2e} m⁴")

    # =========================================================================
    # STEP 2: MODEL
    # =========================================================================
    print_header("STEP 2: Build Model")
    model = build_frame_model(geometry, column, beam)
    print(f"  {len(model.nodes)} nodes ({len(model.fixed_nodes)} fixed), "
          f"{len(model.elements)} members, {model.ndof} DOFs")

    # =========================================================================
    # STEP 3: LOADS (inverted triangle, as in the equivalent lateral load method)
    # =========================================================================
    print_header("STEP 3: Story Forces")
    levels = np.arange(1, args.stories + 1)
    story_forces = args.base_shear * levels / levels.sum()
    for i, f in enumerate(story_forces, start=1):
        print(f"  Story {i}: F = {f:8.1f} kN")
    loads = story_lateral_loads(model, story_forces, geometry.story_height, direction='x')

    # =========================================================================
    # STEP 4: SOLVE
    # =========================================================================
    print_header("STEP 4: Solve")
    result = analyze(model, loads)
    if not result.ok:
        print(f"  Analysis failed: {type(result.error).__name__}: {result.error}")
        return 1

    # =========================================================================
    # STEP 5: RESULTS
    # =========================================================================
    print_header("STEP 5: Story Drift (x)")
    drifts = story_drifts(model, result.displacements, geometry.story_height, direction='x')
    print(story_drift_table(drifts).to_string(index=False, float_format=lambda v: f"{v:.5f}"))

    table = member_force_table(model, result.member_forces(model))
    columns = table[table['kind'] == 'column']
    worst = columns.loc[columns['My'].abs().idxmax()]
    print(f"\n  Largest column My: {worst['label']} end {worst['end']}: {worst['My']:.1f} kN·m")

    if args.html:
        from rcframe.viz import plot_frame_3d
        plot_frame_3d(model, result.displacements, outpath=args.html, show=False,
                      title=f"{args.stories}-story RC frame")
        print(f"\n  3D view saved to {args.html}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
