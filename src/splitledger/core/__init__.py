"""
Core domain models, money primitives and record contracts.

Everything here is independent of persistence and transport.
"""
