"""Tests for the maskmem package.

Hypothesis strategies live in ``strategies`` and are shared by the ledger
and decoder property tests.
"""
