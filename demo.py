import logging

import numpy as np

from quiver3d import GLTFSurface, build_quiver
from quiver3d.logging_config import setup_logging


def helix(radius, height, num_rotations, num_points, arrow_scale):
    """Points along a helix with arrows pointing along its tangent"""
    t = np.linspace(0, 2*np.pi*num_rotations, num_points)
    positions = np.column_stack([
        radius*np.cos(t),
        radius*np.sin(t),
        height*t
    ])
    directions = np.diff(positions, axis=0, append=2*positions[-1:] - positions[-2:-1])
    return positions, arrow_scale*directions


def hsv_colors(count):
    """Evenly spaced hues, one (r,g,b) per arrow"""
    hue = np.linspace(0, 2/3, count)
    return np.column_stack([
        np.clip(np.abs(hue*6 - 3) - 1, 0, 1),
        np.clip(2 - np.abs(hue*6 - 2), 0, 1),
        np.clip(2 - np.abs(hue*6 - 4), 0, 1)
    ])


class QuiverDemo:
    def __init__(self):
        self.surface = GLTFSurface()

        X, Y = np.meshgrid(np.arange(0, 10, 3), np.arange(0, 10, 3))
        self.grid_positions = np.column_stack([X.ravel(), Y.ravel(), np.ones(X.size)])
        self.grid_directions = np.tile([0, 0, 8], (X.size, 1))

    def demo_basic(self):
        """One color for all arrows"""
        build_quiver(self.grid_positions, self.grid_directions, 'yellow', surface=self.surface)

    def demo_colors(self):
        """Arrow specific colors and a longer stem"""
        offset = [12, 0, 0]
        build_quiver(self.grid_positions + offset, self.grid_directions,
                     hsv_colors(len(self.grid_positions)), stem_ratios=0.9, surface=self.surface)

    def demo_stem_ratios(self):
        """Varying stem ratios with a thin stem"""
        offset = [24, 0, 0]
        count = len(self.grid_positions)
        build_quiver(self.grid_positions + offset, self.grid_directions, hsv_colors(count),
                     stem_ratios=np.linspace(0.5, 0.9, count), stem_radii=0.01, surface=self.surface)

    def demo_helix(self):
        """Tangent arrows along two helices"""
        offset = [4.5, 4.5, 12]
        positions, directions = helix(7, 1, 2, 25, 0.8)
        build_quiver(positions + offset, directions, surface=self.surface)

        positions, directions = helix(2, 0.66, 3, 25, 0.8)
        build_quiver(positions + offset, directions, hsv_colors(25), stem_ratios=0.6, surface=self.surface)

    def run(self, features=None):
        """
        Run the demo with specified features.

        Parameters:
        features : list of str or None
            List of features to demo. Available features:
            - 'basic': Grid of yellow arrows
            - 'colors': Per-arrow colors
            - 'stem_ratios': Per-arrow stem ratios
            - 'helix': Arrows along helices
            If None, all features will be demonstrated.
        """
        demo_map = {
            'basic': self.demo_basic,
            'colors': self.demo_colors,
            'stem_ratios': self.demo_stem_ratios,
            'helix': self.demo_helix
        }

        features = features or list(demo_map)

        invalid_features = set(features) - set(demo_map)
        if invalid_features:
            raise ValueError(f"Invalid features: {invalid_features}. "
                             f"Available features are: {list(demo_map)}")

        for feature in features:
            demo_map[feature]()

        self.surface.save("demo_scene.gltf")


if __name__ == "__main__":
    import sys

    setup_logging(logging.INFO)

    # Get features from command line arguments, if provided
    features = sys.argv[1:] if len(sys.argv) > 1 else None

    demo = QuiverDemo()
    demo.run(features)
