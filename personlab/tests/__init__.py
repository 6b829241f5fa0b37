"""
Tests module - Unit and integration tests for the PersonLab package

Provides:
- Core module tests (config, constants, exceptions)
- Decoding tests (extraction, assembly, scoring, decoder)
- IO tests (heads NPZ, pose CSV, images)
- Visualization and CLI tests
"""

__all__ = []
