"""HTTP surface of the session service.

Self-service session endpoints for learners and staff, oversight endpoints
for operators, and the request plumbing they share (trace middleware,
JWT session dependencies, RFC 7807 errors). Routes only dispatch to
command and query handlers.
"""
