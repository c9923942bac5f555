"""End-to-end tests for vectorgen.

These tests run the whole pipeline:
- test_e2e_cli.py: the command line, exit status and output channels
- test_e2e_generated.py: generated modules compiled and run against the
  reference decoder in tests/lib/reference.py
"""
