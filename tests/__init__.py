"""Test package for Problem Solver Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP endpoint and end-to-end turn tests

PDF fixtures are generated in memory; no external services are required.
Leverages pytest with pytest-check for soft assertions.
"""
