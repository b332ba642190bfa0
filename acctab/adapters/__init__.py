"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (HTTP, filesystem,
    logging-backed notifications and an in-memory backend) used by use cases.

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by ``acctab.app.controller`` for runtime wiring and by tests for
    transport-level behavior verification.
"""
