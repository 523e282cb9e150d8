"""Bounded strings, matchers, assertion expressions, sections and test-run reporters."""

__version__ = "0.1.0"

__all__ = [
    "console",
    "events",
    "expression",
    "matchers",
    "section",
    "strings",
    "teamcity",
    "typeinfo",
    "xml_reporter",
]