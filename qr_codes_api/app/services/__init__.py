"""
Service layer.

Each service implements the operations for one domain.  Services take
validated schema objects plus an explicit request context and return
response envelopes, which keeps them usable without the HTTP layer.
"""
