"""
Road segment fragments.

One WFS feature is one piece of a street's centerline. This module parses a GML feature
element into a `PolylineFragment` tagged with the `StreetIdentity` it belongs to.
Fragments sharing an identity are merged into a single street later on
(see `streetfinder.streets.aggregate`).
"""

from __future__ import annotations

import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from streetfinder.config.settings import WfsFieldSettings
from streetfinder.core.errors import ValidationError
from streetfinder.core.geometry import ProjectedPoint


@dataclass(frozen=True, order=True)
class StreetIdentity:
    """Grouping key of a logical street. Equality, hashing and ordering are structural."""

    street_name: str
    place_name: str
    municipality_name: str

    def __post_init__(self) -> None:
        for name in ("street_name", "place_name", "municipality_name"):
            value = getattr(self, name)
            if value is None or not str(value).strip():
                raise ValidationError(f"{name} must not be blank")
            # Frozen dataclass: normalize via object.__setattr__.
            object.__setattr__(self, name, str(value).strip())


@dataclass(frozen=True)
class PolylineFragment:
    """One contiguous piece of a street centerline, as returned by one feature record."""

    identity: StreetIdentity
    vertices: tuple[ProjectedPoint, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        vertices = tuple(self.vertices)
        if not vertices:
            raise ValidationError(f"fragment of {self.identity.street_name!r} has no vertices")
        if not all(math.isfinite(v.x) and math.isfinite(v.y) for v in vertices):
            raise ValidationError(f"fragment of {self.identity.street_name!r} has a non-finite vertex")
        object.__setattr__(self, "vertices", vertices)


def local_name(tag: str) -> str:
    """Strip the `{namespace}` prefix ElementTree puts on qualified tag names."""
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if local_name(child.tag) == name:
            return child
    return None


def _descendant(element: ET.Element, name: str) -> ET.Element | None:
    for node in element.iter():
        if local_name(node.tag) == name:
            return node
    return None


def _text(element: ET.Element, name: str) -> str:
    child = _child(element, local_name(name))
    if child is None:
        raise ValidationError(f"feature has no {name!r} property")
    return "".join(child.itertext())


def parse_pos_list(text: str) -> list[ProjectedPoint]:
    """Pair up a whitespace separated `x y x y ...` list into points."""
    tokens = text.split()
    if len(tokens) % 2:
        raise ValidationError(f"coordinate list has an odd number of values ({len(tokens)})")
    try:
        values = [float(token) for token in tokens]
    except ValueError as exc:
        raise ValidationError(f"coordinate list contains a non-numeric value: {exc}") from exc
    if not all(math.isfinite(value) for value in values):
        raise ValidationError("coordinate list contains a non-finite value (nan or inf)")
    return [ProjectedPoint(values[i], values[i + 1]) for i in range(0, len(values), 2)]


def parse_fragment(element: ET.Element, fields: WfsFieldSettings | None = None) -> PolylineFragment:
    """Parse one road segment feature element into a `PolylineFragment`.

    Raises:
        ValidationError: If a name property is missing/blank, or the geometry is
            missing, empty or unparsable.
    """
    fields = fields or WfsFieldSettings()

    geometry = _child(element, local_name(fields.geometry))
    pos_list = _descendant(geometry, "posList") if geometry is not None else None
    vertices = parse_pos_list(pos_list.text or "") if pos_list is not None else []

    identity = StreetIdentity(
        street_name=_text(element, fields.street),
        place_name=_text(element, fields.place),
        municipality_name=_text(element, fields.municipality),
    )
    return PolylineFragment(identity=identity, vertices=tuple(vertices))
