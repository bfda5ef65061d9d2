"""Pure unit conversion and formatting helpers."""
