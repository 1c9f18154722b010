# ============================================================================
# SCOPE: DOMAIN PACKAGE (Nursing Visits)
# Description: Appointments, patients and visit records of a nursing practice.
# ============================================================================
"""Nursing Visits domain.

Layers:
- domain: entities and value objects (no I/O)
- application: ports, DTOs, use cases and the session-scoped controller
- infrastructure: the Supabase adapter behind the ports
"""
