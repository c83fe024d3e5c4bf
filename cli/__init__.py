"""
Recipient Registry CLI

Commands:
- registry list / get - Round view recomputed from the registry event log
- registry index - Fetch registry history and reconcile it into a store
- registry show - Inspect the indexed store
- registry add - Submit a recipient registration
"""

__version__ = "0.1.0"
