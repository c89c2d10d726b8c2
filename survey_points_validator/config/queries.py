"""
Overpass QL query templates.

The query asks for every survey point node inside a country boundary
that carries both ``latitude`` and ``longitude`` tags, and requests CSV
output without a header row.  The column order is fixed and matches
``CSV_COLUMNS``; ``services.survey_check`` relies on it.
"""

from __future__ import annotations

from typing import Tuple

CSV_COLUMNS: Tuple[str, ...] = ("id", "lat", "latitude", "lon", "longitude")


def build_survey_points_query(area_name: str = "Colombia", admin_level: int = 2, timeout: int = 25) -> str:
    return f"""
[out:csv(::id,::lat,"latitude",::lon,"longitude"; false; ",")][timeout:{timeout}];
area[name="{area_name}"][admin_level={admin_level}]->.searchArea;
(
  node["man_made"="survey_point"]["latitude"]["longitude"](area.searchArea);
);
out body;
>;
out skel qt;
    """.strip() + "\n"
