"""
command-order — integration test package

File: tests/integration/__init__.py

Purpose
- Test package marker file; keep imports light so collection stays fast.
"""
