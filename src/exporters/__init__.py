"""
Export functionality for Clinicalc.
"""

from .json_export import export_json, export_payload

__all__ = [
    "export_json",
    "export_payload",
]
