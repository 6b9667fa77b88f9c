"""glTF rendering surface that collects arrow meshes and writes them to disk."""

import base64
import colorsys
import logging

import numpy as np
from pygltflib import GLTF2, Accessor, Buffer, BufferView, Material, Mesh, Node, Primitive, Scene

# Import constants from pygltflib
from pygltflib.validator import (
    ARRAY_BUFFER,
    ELEMENT_ARRAY_BUFFER,
    FLOAT,
    LINES,
    TRIANGLES,
    UNSIGNED_INT
)

from .errors import InvalidArgumentShapeError

logger = logging.getLogger(__name__)

_default_surface = None


class GLTFSurface:
    """
    A rendering surface backed by a single glTF mesh.

    Every call to add_surface appends one primitive with its own material and
    returns the primitive index as the handle. Surfaces added without a color
    get a distinct golden-ratio hue, which suits meshes added directly rather
    than through build_arrow / build_quiver. Any object with a compatible
    add_surface(vertices, faces, color, edges=False) method can be passed to
    build_arrow / build_quiver instead.
    """

    def __init__(self, unlit=False):
        """
        Initialize an empty surface.

        Parameters:
            unlit: if True, materials ignore scene lighting (default: False)
        """
        self.gltf = GLTF2()
        self.gltf.scenes = [Scene(nodes=[0])]
        self.gltf.nodes = [Node(mesh=0)]
        self.gltf.meshes = [Mesh(primitives=[])]
        self.gltf.materials = []
        self.gltf.buffers = []
        self.gltf.bufferViews = []
        self.gltf.accessors = []

        self.unlit = unlit
        self.color_index = 0
        self.all_data = bytearray()

    def __len__(self):
        return len(self.gltf.meshes[0].primitives)

    def _get_unique_color(self):
        """Generate a unique color using HSV color space"""
        hue = (self.color_index * 0.618033988749895) % 1.0  # golden ratio conjugate
        self.color_index += 1
        return colorsys.hsv_to_rgb(hue, 0.8, 0.95)

    def _add_to_buffer(self, data):
        """Add data to the buffer and return offset"""
        offset = len(self.all_data)
        self.all_data.extend(data.tobytes())
        return offset

    def _create_buffer_view(self, data, target):
        offset = self._add_to_buffer(data)
        buffer_view = BufferView(
            buffer=0,
            byteOffset=offset,
            byteLength=data.nbytes,
            target=target
        )
        self.gltf.bufferViews.append(buffer_view)
        return len(self.gltf.bufferViews) - 1

    def _create_accessor(self, buffer_view_index, component_type, count, accessor_type, min_vals=None, max_vals=None):
        accessor = Accessor(
            bufferView=buffer_view_index,
            componentType=component_type,
            count=count,
            type=accessor_type,
            min=min_vals,
            max=max_vals
        )
        self.gltf.accessors.append(accessor)
        return len(self.gltf.accessors) - 1

    def _create_material(self, color=None):
        """
        Create an opaque, double sided material with the given fill color

        Parameters:
            color: (r,g,b) tuple or None for auto-color
        """
        if color is None:
            color = self._get_unique_color()

        material = {
            "pbrMetallicRoughness": {
                "baseColorFactor": [*(float(c) for c in color), 1.0],
                "metallicFactor": 0.0,
                "roughnessFactor": 0.5
            },
            "alphaMode": "OPAQUE",
            "doubleSided": True
        }

        if self.unlit:
            material["extensions"] = {"KHR_materials_unlit": {}}
            if "KHR_materials_unlit" not in self.gltf.extensionsUsed:
                self.gltf.extensionsUsed.append("KHR_materials_unlit")

        self.gltf.materials.append(Material(**material))
        return len(self.gltf.materials) - 1

    def _add_primitive(self, vertex_accessor_idx, indices, material_idx, mode):
        index_view_idx = self._create_buffer_view(indices, ELEMENT_ARRAY_BUFFER)
        index_accessor_idx = self._create_accessor(
            index_view_idx,
            UNSIGNED_INT,
            len(indices),
            "SCALAR"
        )
        primitive = Primitive(
            attributes={"POSITION": vertex_accessor_idx},
            indices=index_accessor_idx,
            material=material_idx,
            mode=mode
        )
        self.gltf.meshes[0].primitives.append(primitive)
        return len(self.gltf.meshes[0].primitives) - 1

    def add_surface(self, vertices, faces, color=None, edges=False):
        """
        Add a filled surface mesh.

        Parameters:
            vertices: list of [x,y,z] coordinates defining the mesh vertices
            faces: (M,3) triangles or (M,4) quads indexing into vertices; quads are split in two
            color: optional (r,g,b) fill color. If None, a unique color will be generated
            edges: if True, also outline every face with black lines (default: False)

        Returns:
            int: handle of the added surface

        Example:
            vertices = [[0,0,0], [1,0,0], [1,1,0], [0,1,0]]
            faces = [[0,1,2,3]]
            handle = surface.add_surface(vertices, faces, color=(1,0,0))  # Red square
        """
        vertices = np.array(vertices, dtype=np.float32)
        faces = np.array(faces, dtype=np.uint32)
        if vertices.ndim != 2 or vertices.shape[1] != 3 or len(vertices) == 0:
            raise InvalidArgumentShapeError(f"Vertices must be Nx3, got shape {vertices.shape}")
        if faces.ndim != 2 or faces.shape[1] not in (3, 4):
            raise InvalidArgumentShapeError(f"Faces must be Mx3 or Mx4, got shape {faces.shape}")

        if faces.shape[1] == 4:
            triangles = np.stack([faces[:, [0, 1, 3]], faces[:, [1, 2, 3]]], axis=1).reshape(-1, 3)
        else:
            triangles = faces

        vertex_view_idx = self._create_buffer_view(vertices, ARRAY_BUFFER)
        vertex_accessor_idx = self._create_accessor(
            vertex_view_idx,
            FLOAT,
            len(vertices),
            "VEC3",
            vertices.min(axis=0).tolist(),
            vertices.max(axis=0).tolist()
        )

        material_idx = self._create_material(color)
        handle = self._add_primitive(vertex_accessor_idx, triangles.flatten(), material_idx, TRIANGLES)

        if edges:
            ring = np.roll(faces, -1, axis=1)
            outline = np.stack([faces, ring], axis=2).reshape(-1, 2)
            self._add_primitive(vertex_accessor_idx, outline.flatten(), self._create_material((0, 0, 0)), LINES)

        return handle

    def save(self, filename):
        """
        Save the glTF file to disk.

        Parameters:
            filename: output filename (should end in .gltf)

        Example:
            surface.save("quiver.gltf")
        """
        self.gltf.buffers = [Buffer(
            byteLength=len(self.all_data),
            uri=f"data:application/octet-stream;base64,{base64.b64encode(self.all_data).decode('ascii')}"
        )]

        self.gltf.save(filename)
        logger.info("Saved %d surfaces to %s", len(self), filename)


def default_surface():
    """Module level surface used when no surface is passed explicitly."""
    global _default_surface
    if _default_surface is None:
        _default_surface = GLTFSurface()
    return _default_surface
