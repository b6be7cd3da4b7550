"""
Version 1 of the API.

This subpackage bundles the project, event, incident and message
endpoints.  Breaking changes belong in a new version subpackage.
"""
