"""Temporal Context Examples.

Run each example with:
    python examples/basic_usage.py

Requires:
    - pip install temporal-context
"""
