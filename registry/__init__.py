"""
Recipient Registry Reconciliation

Reconciles RecipientAdded / RecipientRemoved events of a registry contract
into a queryable recipient state, streamed into a store or recomputed on
demand for a funding round.
"""

__version__ = "0.1.0"
