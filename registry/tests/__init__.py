"""
Test suite for recipient registry reconciliation.

Focus areas:
- Decoder identity and metadata handling
- Round window rules
- Stream reconciler idempotence and removal strategies
- Snapshot reconciler list/get semantics
"""
