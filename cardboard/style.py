#
# PROJECT: cardboard
# MODULE: cardboard/style.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

"""
Rule-based style classification.

A StyleList is an ordered list of styles for one layer.  Each style carries a
selection rule; the first style whose rule matches a feature's properties
wins.  An unconditional default style is always appended last, which makes
selection total.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from .color import parse_color

logger = logging.getLogger(__name__)


class StyleConfigError(ValueError):
    """Raised when a style configuration cannot be turned into a StyleList."""


class Color(NamedTuple):
    """RGBA color with 0.0-1.0 components."""
    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def from_string(cls, s: str) -> 'Color':
        """Parse a CSS color; anything unparseable becomes white."""
        rgba = parse_color(s)
        if rgba is None:
            logger.debug("Unparseable color %r, using white", s)
            return cls.white()
        r, g, b, a = rgba
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    @classmethod
    def white(cls) -> 'Color':
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def black(cls) -> 'Color':
        return cls(0.0, 0.0, 0.0)

    def to_rgb8(self) -> Tuple[int, int, int]:
        return (round(self.red * 255), round(self.green * 255), round(self.blue * 255))

    def to_rgba8(self) -> Tuple[int, int, int, int]:
        return self.to_rgb8() + (round(self.alpha * 255),)


class RuleKind(Enum):
    SIMPLE = "simple"
    CONTINUOUS = "continuous"
    DISCRETE = "discrete"


@dataclass(frozen=True)
class Rule:
    """
    Selection predicate of a style.

    SIMPLE matches everything.  CONTINUOUS matches when the numeric property
    `prop_name` lies in [low, high).  DISCRETE matches when the string
    property `prop_name` is one of `tokens`.  A missing property or a value of
    the wrong type never matches.
    """
    kind: RuleKind = RuleKind.SIMPLE
    prop_name: Optional[str] = None
    low: float = 0.0
    high: float = 0.0
    tokens: Tuple[str, ...] = ()

    @classmethod
    def simple(cls) -> 'Rule':
        return cls()

    @classmethod
    def interval(cls, prop_name: str, low: float, high: float) -> 'Rule':
        return cls(RuleKind.CONTINUOUS, prop_name, low=float(low), high=float(high))

    @classmethod
    def one_of(cls, prop_name: str, tokens) -> 'Rule':
        return cls(RuleKind.DISCRETE, prop_name, tokens=tuple(tokens))

    def matches(self, properties: Optional[dict]) -> bool:
        if self.kind is RuleKind.SIMPLE:
            return True
        if not isinstance(properties, dict) or self.prop_name not in properties:
            return False
        value = properties[self.prop_name]
        if self.kind is RuleKind.CONTINUOUS:
            # JSON booleans are not numbers here
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return False
            return self.low <= value < self.high
        if isinstance(value, str):
            return value in self.tokens
        return False


@dataclass(frozen=True)
class Style:
    stroke_width: float = 1.0
    stroke_color: Optional[Color] = None
    fill_color: Optional[Color] = None
    rule: Rule = field(default_factory=Rule.simple)

    @classmethod
    def default(cls) -> 'Style':
        return cls(stroke_width=1.0,
                   stroke_color=Color.black(),
                   fill_color=Color.white(),
                   rule=Rule.simple())


class StyleList:
    """
    Ordered styles of one layer plus, once `apply` ran, the resolved style
    index of every feature of that layer (addressed by feature position).
    """

    def __init__(self, styles=None):
        self.styles: List[Style] = list(styles or [])
        self.applied: Optional[List[int]] = None

    @classmethod
    def with_default(cls, styles=()) -> 'StyleList':
        """Build a list from `styles` and append the mandatory default style."""
        sl = cls(styles)
        sl.add(Style.default())
        return sl

    @classmethod
    def from_config(cls, config: dict) -> 'StyleList':
        return style_list_from_config(config)

    def __len__(self):
        return len(self.styles)

    def __iter__(self):
        return iter(self.styles)

    def __getitem__(self, index):
        return self.styles[index]

    def __repr__(self):
        return f"StyleList({len(self.styles)} styles, applied={self.applied is not None})"

    def add(self, style: Style) -> 'StyleList':
        self.styles.append(style)
        return self

    def select(self, properties: Optional[dict]) -> Optional[int]:
        """Index of the first style whose rule matches, or None."""
        for index, style in enumerate(self.styles):
            if style.rule.matches(properties):
                return index
        return None

    def apply(self, properties_list) -> 'StyleList':
        """Resolve and store the style index of every feature."""
        applied = []
        for feature_index, properties in enumerate(properties_list):
            index = self.select(properties)
            if index is None:
                raise StyleConfigError(
                    f"Could not find a style for feature {feature_index}")
            applied.append(index)
        self.applied = applied
        return self

    def resolved_index(self, feature_index: int) -> Optional[int]:
        if self.applied is None or not 0 <= feature_index < len(self.applied):
            return None
        return self.applied[feature_index]

    def get_for(self, feature_index: int) -> Optional[Style]:
        """Style resolved by `apply` for a feature, or None."""
        index = self.resolved_index(feature_index)
        if index is None:
            return None
        return self.style_at(index)

    def style_at(self, index: int) -> Optional[Style]:
        if 0 <= index < len(self.styles):
            return self.styles[index]
        return None


class StyleCollection:
    """Style lists of all layers, addressed by layer index."""

    def __init__(self, style_lists=None):
        self.lists: List[StyleList] = list(style_lists or [])

    def __len__(self):
        return len(self.lists)

    def __iter__(self):
        return iter(self.lists)

    def __getitem__(self, index):
        return self.lists[index]

    def append(self, style_list: StyleList):
        self.lists.append(style_list)

    def get_for(self, layer_index: int, style_index: int) -> Optional[Style]:
        if not 0 <= layer_index < len(self.lists):
            return None
        return self.lists[layer_index].style_at(style_index)


# ── Configuration parsing ───────────────────────────────────────────────

def _field(config, name, types, where):
    if not isinstance(config, dict) or name not in config:
        raise StyleConfigError(f"{where}: missing field {name!r}")
    value = config[name]
    if isinstance(value, bool) or not isinstance(value, types):
        raise StyleConfigError(f"{where}: field {name!r} has invalid value {value!r}")
    return value


def _color(config, name, where) -> Optional[Color]:
    if not isinstance(config, dict) or name not in config:
        raise StyleConfigError(f"{where}: missing field {name!r}")
    value = config[name]
    if value is None:
        return None
    if not isinstance(value, str):
        raise StyleConfigError(f"{where}: field {name!r} must be a color string")
    return Color.from_string(value)


def _paint(config, rule: Rule, where) -> Style:
    return Style(stroke_width=float(_field(config, "strokeWidth", (int, float), where)),
                 stroke_color=_color(config, "strokeColor", where),
                 fill_color=_color(config, "fillColor", where),
                 rule=rule)


def style_list_from_config(config: dict) -> StyleList:
    """
    Build a StyleList from a decoded style document.

    The document's "kind" selects one of three shapes:
      simple:     {"strokeColor", "fillColor", "strokeWidth"}
      continuous: {"propName", "intervals": [{"low", "high", <paint>}]}
      discrete:   {"propName", "groups": [{"values": [...], <paint>}]}
    A color may be null to disable fill or stroke.  The default style is
    appended last.  Raises StyleConfigError on anything else.
    """
    kind = config.get("kind") if isinstance(config, dict) else None
    styles = []

    if kind == RuleKind.SIMPLE.value:
        styles.append(_paint(config, Rule.simple(), "simple"))

    elif kind == RuleKind.CONTINUOUS.value:
        prop_name = _field(config, "propName", str, "continuous")
        intervals = _field(config, "intervals", list, "continuous")
        for i, it in enumerate(intervals):
            where = f"continuous.intervals[{i}]"
            rule = Rule.interval(prop_name,
                                 _field(it, "low", (int, float), where),
                                 _field(it, "high", (int, float), where))
            styles.append(_paint(it, rule, where))

    elif kind == RuleKind.DISCRETE.value:
        prop_name = _field(config, "propName", str, "discrete")
        groups = _field(config, "groups", list, "discrete")
        for i, group in enumerate(groups):
            where = f"discrete.groups[{i}]"
            values = _field(group, "values", list, where)
            if not all(isinstance(v, str) for v in values):
                raise StyleConfigError(f"{where}: values must be strings")
            styles.append(_paint(group, Rule.one_of(prop_name, values), where))

    else:
        raise StyleConfigError(f"Unrecognized style kind {kind!r}")

    return StyleList.with_default(styles)


def load_style(filename) -> StyleList:
    """Read a JSON style file.  Decoding or config errors propagate."""
    with open(filename, 'r', encoding='utf-8') as f:
        config = json.load(f)
    style_list = style_list_from_config(config)
    logger.info("Loaded style %s (%d styles)", filename, len(style_list))
    return style_list
