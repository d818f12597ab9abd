"""Placeholder model shown when a GLB asset cannot be loaded.

Builds a single-mesh binary glTF (GLB 2.0) unit cube with a flat colour
material. The file is small enough to embed as a data URI.
"""

import base64
import json
import struct
from functools import lru_cache

GLB_MAGIC = 0x46546C67  # "glTF"
GLB_VERSION = 2
CHUNK_JSON = 0x4E4F534A
CHUNK_BIN = 0x004E4942

FLOAT = 5126
UNSIGNED_SHORT = 5123
ARRAY_BUFFER = 34962
ELEMENT_ARRAY_BUFFER = 34963

RED = (1.0, 0.0, 0.0, 1.0)

_CUBE_VERTICES = [
    (-0.5, -0.5, -0.5),
    (0.5, -0.5, -0.5),
    (0.5, 0.5, -0.5),
    (-0.5, 0.5, -0.5),
    (-0.5, -0.5, 0.5),
    (0.5, -0.5, 0.5),
    (0.5, 0.5, 0.5),
    (-0.5, 0.5, 0.5),
]

# Counter-clockwise seen from outside
_CUBE_INDICES = [
    4, 5, 6, 4, 6, 7,  # +z
    1, 0, 3, 1, 3, 2,  # -z
    5, 1, 2, 5, 2, 6,  # +x
    0, 4, 7, 0, 7, 3,  # -x
    7, 6, 2, 7, 2, 3,  # +y
    0, 1, 5, 0, 5, 4,  # -y
]


def _pad(data: bytes, fill: bytes) -> bytes:
    return data + fill * ((4 - len(data) % 4) % 4)


@lru_cache
def build_cube_glb(color: tuple[float, float, float, float] = RED) -> bytes:
    """Return GLB bytes for a unit cube of ``color`` (RGBA, 0..1)."""
    positions = b"".join(struct.pack("<3f", *vertex) for vertex in _CUBE_VERTICES)
    indices = struct.pack(f"<{len(_CUBE_INDICES)}H", *_CUBE_INDICES)
    binary = _pad(positions + indices, b"\x00")

    document = {
        "asset": {"version": "2.0", "generator": "glbmarket"},
        "scene": 0,
        "scenes": [{"nodes": [0]}],
        "nodes": [{"mesh": 0}],
        "meshes": [
            {"primitives": [{"attributes": {"POSITION": 0}, "indices": 1, "material": 0}]}
        ],
        "materials": [
            {
                "pbrMetallicRoughness": {
                    "baseColorFactor": list(color),
                    "metallicFactor": 0.0,
                    "roughnessFactor": 1.0,
                }
            }
        ],
        "buffers": [{"byteLength": len(binary)}],
        "bufferViews": [
            {
                "buffer": 0,
                "byteOffset": 0,
                "byteLength": len(positions),
                "target": ARRAY_BUFFER,
            },
            {
                "buffer": 0,
                "byteOffset": len(positions),
                "byteLength": len(indices),
                "target": ELEMENT_ARRAY_BUFFER,
            },
        ],
        "accessors": [
            {
                "bufferView": 0,
                "componentType": FLOAT,
                "count": len(_CUBE_VERTICES),
                "type": "VEC3",
                "min": [-0.5, -0.5, -0.5],
                "max": [0.5, 0.5, 0.5],
            },
            {
                "bufferView": 1,
                "componentType": UNSIGNED_SHORT,
                "count": len(_CUBE_INDICES),
                "type": "SCALAR",
            },
        ],
    }
    json_chunk = _pad(json.dumps(document, separators=(",", ":")).encode("utf-8"), b" ")

    total_length = 12 + 8 + len(json_chunk) + 8 + len(binary)
    return b"".join(
        [
            struct.pack("<III", GLB_MAGIC, GLB_VERSION, total_length),
            struct.pack("<II", len(json_chunk), CHUNK_JSON),
            json_chunk,
            struct.pack("<II", len(binary), CHUNK_BIN),
            binary,
        ]
    )


def cube_data_uri(color: tuple[float, float, float, float] = RED) -> str:
    """The placeholder cube as a ``data:model/gltf-binary`` URI."""
    encoded = base64.b64encode(build_cube_glb(color)).decode("ascii")
    return f"data:model/gltf-binary;base64,{encoded}"
