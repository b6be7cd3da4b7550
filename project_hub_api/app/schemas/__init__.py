"""
Pydantic schema definitions for service payloads.

Each domain (events, incidents, messages, projects) defines its own
models for inputs and returned records.  Schemas are separated from
the store so that the service contract does not depend on how rows
are persisted.
"""
