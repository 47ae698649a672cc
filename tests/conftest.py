import json

import pytest

from cardboard.camera import Camera
from cardboard.layers import Plane
from cardboard.math_utils import Vec3


def triangle(*coords, layer_index=0, style_index=0, feature_index=0):
    return Plane(tuple(Vec3(*c) for c in coords), layer_index, style_index, feature_index)


@pytest.fixture()
def make_triangle():
    return triangle


@pytest.fixture()
def oblique_camera():
    """Looks at the origin from behind and above, never straight down."""
    return Camera(Vec3(0, -10, 5), Vec3(0, 0, 0))


@pytest.fixture()
def ground_triangle():
    return triangle((-1, -1, 0), (1, -1, 0), (0, 1, 0))


def polygon_feature(ring, **properties):
    return {
        "type": "Feature",
        "properties": properties,
        "geometry": {"type": "Polygon", "coordinates": [ring]},
    }


@pytest.fixture()
def map_files(tmp_path):
    """A two-layer manifest: styled landuse plus an unstyled outline layer."""
    landuse = {
        "type": "FeatureCollection",
        "features": [
            polygon_feature([[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]], height=5),
            polygon_feature([[20, 0, 4], [30, 0, 4], [30, 10, 4], [20, 0, 4]], height=50),
            {"type": "Feature", "properties": {}, "geometry": {"type": "Point", "coordinates": [1, 2]}},
        ],
    }
    outline = {
        "type": "Polygon",
        "coordinates": [[[-5, -5], [35, -5], [35, 15], [-5, 15], [-5, -5]]],
    }
    style = {
        "kind": "continuous",
        "propName": "height",
        "intervals": [
            {"low": 0, "high": 10, "fillColor": "red", "strokeColor": "#0000ff", "strokeWidth": 2},
        ],
    }
    (tmp_path / "landuse.geojson").write_text(json.dumps(landuse))
    (tmp_path / "outline.geojson").write_text(json.dumps(outline))
    (tmp_path / "landuse.json").write_text(json.dumps(style))
    manifest = tmp_path / "city.manifest"
    manifest.write_text("# layers, bottom first\n"
                        "outline.geojson\n"
                        "\n"
                        "landuse.json:landuse.geojson\n")
    return manifest
