"""
Submission relay.

Retrieves a submitted file, publishes it to object storage, e-mails the
submitter about the outcome, and records the outcome in a ledger. The entry
point is :func:`relay.handler.handler`.
"""
