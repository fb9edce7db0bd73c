"""
Test support utilities for recordkit tests.

Sample record types shared by several test modules live in
``tests._support.records``; fixtures built from them are in ``conftest.py``.
"""
