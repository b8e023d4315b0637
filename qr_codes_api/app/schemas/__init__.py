"""
Pydantic schema definitions for API payloads.

Each domain (QR codes, scan events) defines its own models for request
and response bodies.  Wire payloads use camelCase keys while the Python
attributes stay snake_case; the models accept both spellings on input.
"""
