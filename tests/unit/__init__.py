"""
Unit Tests

Unit tests run in isolation without external dependencies.
Filesystem access is confined to pytest's tmp_path.
"""
