"""
Value objects passed between the pipeline stages.

A run moves these in memory: CSV rows become ``SurveyPointRecord``
instances, mismatches become ``DiscrepancyEntry`` instances and the
``Report`` collects the entries together with the run timestamps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

OSM_NODE_URL = "https://www.openstreetmap.org/node/{id}"


class Axis(Enum):
    LATITUDE = "latitude"
    LONGITUDE = "longitude"

    @property
    def label(self) -> str:
        """Spanish name used in the emailed report."""
        return "latitud" if self is Axis.LATITUDE else "longitud"


@dataclass(frozen=True)
class SurveyPointRecord:
    """One survey point node as returned by the Overpass CSV output."""

    id: int
    element_lat: Decimal
    tag_lat: Decimal
    element_lon: Decimal
    tag_lon: Decimal


@dataclass(frozen=True)
class DiscrepancyEntry:
    point_id: int
    axis: Axis
    element_value: Decimal
    rounded_tag_value: Decimal

    @property
    def node_url(self) -> str:
        return OSM_NODE_URL.format(id=self.point_id)

    def format_line(self) -> str:
        """Render the entry as a single report line.

        Both axis labels are padded to the same width so the values line
        up in the email body.
        """
        prefix = f"Error precisión {self.axis.label}:"
        return (
            f"{prefix:<26}<pre>Ele {self.element_value:12.7f}, "
            f"Tag {self.rounded_tag_value:12.7f}</pre> - {self.node_url}."
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.point_id,
            "axis": self.axis.value,
            "element": str(self.element_value),
            "tag": str(self.rounded_tag_value),
            "url": self.node_url,
        }


@dataclass
class Report:
    started_at: datetime
    entries: List[DiscrepancyEntry] = field(default_factory=list)
    finished_at: Optional[datetime] = None

    def add(self, entry: DiscrepancyEntry) -> None:
        self.entries.append(entry)

    def extend(self, entries: List[DiscrepancyEntry]) -> None:
        self.entries.extend(entries)

    def finish(self, when: Optional[datetime] = None) -> None:
        self.finished_at = when or datetime.now()

    @property
    def has_discrepancies(self) -> bool:
        return bool(self.entries)
