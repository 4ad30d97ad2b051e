# waktusolat/services/gazetteer.py
"""
Static directory of the 60 JAKIM prayer time zones.

The gazetteer is built once by the app factory from two bundled files:
`zones.json` (codes, states and ordered district lists) and
`boundaries.geojson` (district polygons tagged with their zone code). It is
never mutated afterwards, so it is shared by every request without locking.
"""
import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from flask import current_app
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry
from shapely.prepared import prep

EXPECTED_ZONE_COUNT = 60


@dataclass(frozen=True)
class DistrictBoundary:
    """One district polygon belonging to a zone."""

    state: str
    district: str
    geometry: BaseGeometry
    prepared: object = field(repr=False, compare=False)


@dataclass(frozen=True)
class Zone:
    code: str
    state_name: str
    districts: Tuple[str, ...]
    boundaries: Tuple[DistrictBoundary, ...] = ()

    @property
    def state_code(self) -> str:
        return self.code[:3]

    @property
    def district_label(self) -> str:
        """Districts joined in display order, e.g. 'Gombak, Petaling, ...'."""
        return ", ".join(self.districts)


class ZoneGazetteer:
    """Read-only, ordered collection of zones keyed by JAKIM code."""

    def __init__(self, zones: List[Zone]):
        self._zones: Tuple[Zone, ...] = tuple(zones)
        self._by_code: Dict[str, Zone] = {zone.code: zone for zone in self._zones}

    def __iter__(self):
        return iter(self._zones)

    def __len__(self):
        return len(self._zones)

    def __contains__(self, code):
        return code in self._by_code

    def get(self, code: str) -> Optional[Zone]:
        return self._by_code.get(code)

    def list_zones(self, state_code: Optional[str] = None) -> List[Zone]:
        """
        All zones in gazetteer order, or only those whose code starts with
        `state_code`. The prefix match is case-sensitive and an unknown
        prefix simply yields an empty list.
        """
        if state_code is None:
            return list(self._zones)
        return [zone for zone in self._zones if zone.code.startswith(state_code)]


def build_gazetteer(zone_entries: List[dict], boundary_features: List[dict],
                    expected_count: int = EXPECTED_ZONE_COUNT) -> ZoneGazetteer:
    """
    Builds and validates a gazetteer from raw zone entries and GeoJSON features.

    Raises:
        ValueError: if the zone directory is not a valid partition of
            `expected_count` uniquely-coded zones, a boundary feature
            references an unknown zone, or a zone has no boundary.
    """
    if len(zone_entries) != expected_count:
        raise ValueError(f"Zone directory must contain exactly {expected_count} zones, found {len(zone_entries)}.")

    boundaries_by_code: Dict[str, List[DistrictBoundary]] = {}
    known_codes = {entry['jakimCode'] for entry in zone_entries}
    for feature in boundary_features:
        props = feature.get('properties') or {}
        code = props.get('jakimCode')
        if code not in known_codes:
            raise ValueError(f"Boundary feature references unknown zone '{code}'.")
        geometry = shape(feature['geometry'])
        boundaries_by_code.setdefault(code, []).append(
            DistrictBoundary(
                state=props.get('state', code[:3]),
                district=props.get('district', ''),
                geometry=geometry,
                prepared=prep(geometry),
            )
        )

    zones = []
    seen = set()
    for entry in zone_entries:
        code = entry['jakimCode']
        if code in seen:
            raise ValueError(f"Duplicate zone code '{code}' in zone directory.")
        seen.add(code)
        districts = tuple(entry.get('daerah') or ())
        if not districts:
            raise ValueError(f"Zone '{code}' has no districts.")
        zones.append(Zone(
            code=code,
            state_name=entry['negeri'],
            districts=districts,
            boundaries=tuple(boundaries_by_code.get(code, ())),
        ))

    unbounded = [zone.code for zone in zones if not zone.boundaries]
    if unbounded:
        raise ValueError(f"Zones without a boundary: {', '.join(unbounded)}.")
    return ZoneGazetteer(zones)


def load_gazetteer(zones_path: str, boundaries_path: str) -> ZoneGazetteer:
    """Reads the bundled data files and builds the process-wide gazetteer."""
    with open(zones_path, 'r', encoding='utf-8') as f:
        zone_entries = json.load(f)
    with open(boundaries_path, 'r', encoding='utf-8') as f:
        boundary_features = json.load(f).get('features', [])
    return build_gazetteer(zone_entries, boundary_features)


def get_gazetteer() -> ZoneGazetteer:
    """The gazetteer attached to the running app by create_app."""
    return current_app.extensions['zone_gazetteer']
