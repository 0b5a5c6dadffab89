"""
Tagged stdout lines picked up by the CI dashboard.
"""

import sys


def measurement(name, value, out=None):
    """Print a numeric measurement tag."""
    out = out or sys.stdout
    print(f'<DartMeasurement name="{name}" type="numeric/double">{value:g}</DartMeasurement>', file=out)


def measurement_file(name, path, out=None, mime_type="image/png"):
    """Print a file-reference tag pointing at an artifact on disk."""
    out = out or sys.stdout
    print(f'<DartMeasurementFile name="{name}" type="{mime_type}">{path}</DartMeasurementFile>', file=out)
