"""Test package for mailexport.

What:
  Marks ``tests`` as a package so the unit and end-to-end suites resolve under
  one root.

How:
  Shared fixtures live in ``tests/conftest.py``; canned message and
  configuration documents live in ``tests/data``.
"""
