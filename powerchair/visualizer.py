"""
Visualization module for generated scenes.

Generates a three-view (side, front, top) preview of the scene using
matplotlib, drawing the bounding box of every solid in its item color.
"""

from pathlib import Path
from typing import List, Tuple
import matplotlib.pyplot as plt
import matplotlib.patches as patches

# (title, horizontal axis, vertical axis) per view
VIEWS: List[Tuple[str, str, str]] = [
    ('Side (Y-Z)', 'Y', 'Z'),
    ('Front (X-Z)', 'X', 'Z'),
    ('Top (X-Y)', 'X', 'Y'),
]


def solid_boxes(shape) -> List[Tuple[Tuple[float, float, float], Tuple[float, float, float]]]:
    """(min, max) corners of each solid in shape."""
    boxes = []
    for solid in shape.solids():
        bbox = solid.bounding_box()
        boxes.append(((bbox.min.X, bbox.min.Y, bbox.min.Z),
                      (bbox.max.X, bbox.max.Y, bbox.max.Z)))
    return boxes


def plot_scene_views(scene, output_path: Path, title: str = "") -> Path:
    """Generate and save a three-view preview image of the scene."""
    axis_index = {'X': 0, 'Y': 1, 'Z': 2}
    fig, axes = plt.subplots(1, 3, figsize=(15, 5))

    for ax, (view_title, h, v) in zip(axes, VIEWS):
        h_idx, v_idx = axis_index[h], axis_index[v]
        for item in scene:
            for lo, top in solid_boxes(item.shape):
                ax.add_patch(patches.Rectangle(
                    (lo[h_idx], lo[v_idx]),
                    top[h_idx] - lo[h_idx],
                    top[v_idx] - lo[v_idx],
                    facecolor=item.color, edgecolor='black',
                    linewidth=0.5, alpha=0.6,
                ))
        if v == 'Z':
            # Ground line
            ax.axhline(0.0, color='saddlebrown', linewidth=1.0)
        ax.set_title(view_title)
        ax.set_xlabel(f"{h} [mm]")
        ax.set_ylabel(f"{v} [mm]")
        ax.set_aspect('equal')
        ax.autoscale_view()

    fig.suptitle(title or Path(output_path).stem)
    plt.tight_layout()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
