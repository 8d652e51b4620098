# tests/property/__init__.py
"""Property-based tests for bounded-http.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of. The local-address filter is a
security boundary, so it gets the heaviest coverage here.

Test categories:
- core/: Local-address classification over generated IP literals
- clients/: Form body encoding and derived Content-Length
"""
