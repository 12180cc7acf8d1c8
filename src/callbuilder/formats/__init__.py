"""Text and JSON formats.

``callbuilder.formats.text`` parses Java-like type and signature text;
``callbuilder.formats.json`` reads generation requests and writes plans.
"""

from callbuilder.formats.text import parse_signature, parse_type

__all__ = ["parse_signature", "parse_type"]
