"""Fuzz testing infrastructure for cldrprovider.

This package contains intensive property tests over untrusted inputs:
- packed era buffers of arbitrary bytes
- tagged key strings of arbitrary text

Python 3.13+.
"""
