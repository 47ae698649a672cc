#
# PROJECT: cardboard
# MODULE: cardboard/layers.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import json
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .math_utils import Vec3
from .style import StyleCollection, StyleList, load_style

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Plane:
    """
    One closed polygon ring.

    The ring is implicitly closed: the last point connects back to the first,
    which is not repeated.  `feature_index` is the position of the source
    feature within its layer and `style_index` the style resolved for it.
    """
    points: Tuple[Vec3, ...]
    layer_index: int = 0
    style_index: int = 0
    feature_index: int = 0

    def __post_init__(self):
        points = tuple(self.points)
        if len(points) < 3:
            raise ValueError(f"Plane needs at least 3 points, got {len(points)}")
        object.__setattr__(self, 'points', points)

    def __iter__(self):
        return iter(self.points)

    def __len__(self):
        return len(self.points)


class PlaneList(list):
    """Planes of every layer.  List order carries no drawing semantics."""

    def merge(self, other: 'PlaneList'):
        self.extend(other)


# ── GeoJSON extraction ──────────────────────────────────────────────────

def ring_points(ring) -> Optional[Tuple[Vec3, ...]]:
    """
    Convert a GeoJSON linear ring to points.  Missing Z defaults to 0.
    The repeated closing position is dropped.  Returns None for rings with
    fewer than 3 points or malformed positions.
    """
    if not isinstance(ring, list):
        return None
    points = []
    try:
        for pos in ring:
            if not isinstance(pos, (list, tuple)):
                return None
            z = pos[2] if len(pos) > 2 else 0.0
            points.append(Vec3(pos[0], pos[1], z))
    except (TypeError, ValueError, IndexError, KeyError):
        return None
    if len(points) > 1 and points[0] == points[-1]:
        points.pop()
    if len(points) < 3:
        return None
    return tuple(points)


def _plane_from_polygon(rings, layer_index, feature_index, style_index) -> List[Plane]:
    if not isinstance(rings, list) or not rings:
        return []
    points = ring_points(rings[0])
    if points is None:
        return []
    return [Plane(points, layer_index, style_index, feature_index)]


def planes_from_geometry(geometry, layer_index=0, feature_index=0, style_index=0) -> List[Plane]:
    """Polygon gives its exterior ring, MultiPolygon one ring per polygon, anything else nothing."""
    if not isinstance(geometry, dict):
        return []
    kind = geometry.get("type")
    coords = geometry.get("coordinates")
    if kind == "Polygon":
        return _plane_from_polygon(coords, layer_index, feature_index, style_index)
    if kind == "MultiPolygon":
        planes = []
        if not isinstance(coords, list):
            return []
        for polygon in coords:
            planes.extend(_plane_from_polygon(polygon, layer_index, feature_index, style_index))
        return planes
    logger.debug("Skipping unsupported geometry %r (feature %d)", kind, feature_index)
    return []


def planes_from_feature(feature, layer_index=0, feature_index=0, style_index=0) -> List[Plane]:
    return planes_from_geometry(feature.get("geometry"), layer_index, feature_index, style_index)


def get_features(geojson) -> List[dict]:
    """Features of a FeatureCollection, a single Feature, or a bare geometry."""
    if not isinstance(geojson, dict):
        return []
    kind = geojson.get("type")
    if kind == "FeatureCollection":
        return [f for f in geojson.get("features") or [] if isinstance(f, dict)]
    if kind == "Feature":
        return [geojson]
    if kind is not None:
        return [{"type": "Feature", "geometry": geojson, "properties": None}]
    return []


def get_properties(features) -> List[Optional[dict]]:
    """Properties per feature; anything but an object becomes None."""
    props = [f.get("properties") for f in features]
    return [p if isinstance(p, dict) else None for p in props]


def load_geojson(filename):
    with open(filename, 'r', encoding='utf-8') as f:
        return json.load(f)


def layer_planes(geojson, style_list: StyleList, layer_index: int) -> PlaneList:
    """
    Resolve styles for every feature of one layer and extract its planes.

    `style_list.apply` runs over the layer's feature properties; each plane
    then records the resolved index of its feature.
    """
    features = get_features(geojson)
    style_list.apply(get_properties(features))
    planes = PlaneList()
    for feature_index, feature in enumerate(features):
        style_index = style_list.resolved_index(feature_index)
        planes.extend(planes_from_feature(feature, layer_index, feature_index, style_index))
    return planes


# ── Layer manifest ──────────────────────────────────────────────────────

@dataclass
class LayerData:
    """Planes and styles of every loaded layer."""
    planes: PlaneList = field(default_factory=PlaneList)
    styles: StyleCollection = field(default_factory=StyleCollection)

    def add_layer(self, geojson, style_list: Optional[StyleList] = None) -> int:
        """Append a layer from decoded GeoJSON.  Returns its layer index."""
        if style_list is None:
            style_list = StyleList.with_default()
        layer_index = len(self.styles)
        planes = layer_planes(geojson, style_list, layer_index)
        self.planes.merge(planes)
        self.styles.append(style_list)
        return layer_index

    def load_layer(self, data_path, style_path=None) -> int:
        style_list = load_style(style_path) if style_path else None
        layer_index = self.add_layer(load_geojson(data_path), style_list)
        logger.info("Loaded layer %d from %s (%d planes)",
                    layer_index, data_path,
                    sum(1 for p in self.planes if p.layer_index == layer_index))
        return layer_index

    @classmethod
    def from_manifest(cls, filename) -> 'LayerData':
        """
        Load layers listed in a manifest, one `style_path:data_path` (or just
        `data_path`) per line.  Blank lines and `#` comments are skipped;
        relative paths are resolved against the manifest's directory.
        Style and I/O errors propagate: a layer without its styles is not
        rendered at all.
        """
        base = os.path.dirname(os.path.abspath(filename))
        data = cls()
        with open(filename, 'r', encoding='utf-8') as f:
            lines = f.read().splitlines()

        for line in lines:
            entry = line.strip()
            if not entry or entry.startswith('#'):
                continue
            style_path, sep, data_path = entry.rpartition(':')
            style_path = os.path.join(base, style_path) if sep and style_path else None
            data.load_layer(os.path.join(base, data_path), style_path)

        logger.info("Loaded %d layers, %d planes", len(data.styles), len(data.planes))
        return data
