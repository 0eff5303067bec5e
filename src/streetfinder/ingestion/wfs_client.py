"""
WFS ingestion client (NWB road segments).

This module is responsible only for:
- building the `GetFeature` URL for a bounding box,
- knowing where features and the next page link live in a WFS 2.0 response,
- rewriting the service's internal next link to its public endpoint,
- parsing features into `PolylineFragment`s.

It intentionally does not group or measure anything; see `streetfinder.streets` for that.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

import httpx

from streetfinder.config.settings import Settings, WfsFieldSettings, WfsSettings
from streetfinder.core.errors import ParseError
from streetfinder.core.geometry import BoundingBox
from streetfinder.core.http import get_xml
from streetfinder.ingestion.fragments import PolylineFragment, local_name, parse_fragment
from streetfinder.ingestion.pagination import Page, fetch_all_features

logger = logging.getLogger(__name__)


class WfsPageParser:
    """Split a `wfs:FeatureCollection` into feature elements and its `next` link."""

    def __init__(self, type_name: str):
        self._feature_name = local_name(type_name.split(":", 1)[-1])

    def parse_page(self, document: ET.Element) -> Page[ET.Element]:
        if local_name(document.tag) != "FeatureCollection":
            raise ParseError(f"expected a FeatureCollection, got {local_name(document.tag)!r}")
        items = [node for node in document.iter() if local_name(node.tag) == self._feature_name]
        next_url = (document.get("next") or "").strip() or None
        return Page(items=items, next_url=next_url)


class SubstringLinkRewriter:
    """Replace one fixed substring in every next link."""

    def __init__(self, find: str, replace: str):
        self._find = find
        self._replace = replace

    def rewrite(self, url: str) -> str:
        if not self._find:
            return url
        return url.replace(self._find, self._replace)


class WfsClient:
    """Fetch every road segment fragment inside a bounding box."""

    def __init__(self, settings: Settings):
        self._settings = settings
        wfs = settings.wfs
        self._parser = WfsPageParser(wfs.type_name)
        self._rewriter = SubstringLinkRewriter(wfs.next_link_find, wfs.next_link_replace)

    @property
    def _wfs(self) -> WfsSettings:
        return self._settings.wfs

    def _fetch_document(self, url: str) -> ET.Element:
        return get_xml(url, timeout_seconds=self._settings.app.http_timeout_seconds)

    def build_url(self, bbox: BoundingBox) -> str:
        """Return the first-page `GetFeature` URL for `bbox`."""
        fields: WfsFieldSettings = self._wfs.fields
        params = {
            "REQUEST": "GetFeature",
            "VERSION": self._wfs.version,
            "SERVICE": "WFS",
            "typenames": self._wfs.type_name,
            "propertyname": ",".join([fields.street, fields.municipality, fields.place, fields.geometry]),
            "count": str(self._wfs.page_size),
            "bbox": bbox.as_bbox_param(),
        }
        return str(httpx.URL(self._wfs.base_url, params=params))

    def fetch_features(self, bbox: BoundingBox) -> list[ET.Element]:
        """Return the raw feature elements of all result pages, in arrival order."""
        return fetch_all_features(
            self.build_url(bbox),
            fetch=self._fetch_document,
            parser=self._parser,
            rewriter=self._rewriter,
        )

    def get_fragments(self, bbox: BoundingBox) -> list[PolylineFragment]:
        """Return parsed fragments inside `bbox` (raises on the first malformed feature)."""
        features = self.fetch_features(bbox)
        fragments = [parse_fragment(feature, self._wfs.fields) for feature in features]
        logger.info("%s street fragments found.", len(fragments))
        return fragments
