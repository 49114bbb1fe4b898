"""
Test suite for splitledger

Contains:
- tests/unit/          : Unit tests for money, models, contracts, guard,
                         ledger computations, store and service
"""
