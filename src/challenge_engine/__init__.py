"""Gantz challenge engine: workout parsing, verification and room progression."""
