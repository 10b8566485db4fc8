"""Session domain: login sessions, location observations, detection rules.

Framework-free Python. Entities own their state transitions
(active/suspicious/inactive/revoked), value objects carry detector
thresholds and verdicts, protocols are the ports the application layer
depends on, and events record what happened to a session.
"""
