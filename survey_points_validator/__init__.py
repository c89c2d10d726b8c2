"""
Validation of OpenStreetMap survey points in Colombia.

The package downloads every ``man_made=survey_point`` node that carries
``latitude``/``longitude`` tags, compares the node position against the
tag values rounded to seven decimals and emails a report with every
mismatch found.  Run it through ``survey_points_validator.cli.check``.
"""

__version__ = "2023.9.29"
