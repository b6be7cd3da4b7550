"""
Application package initializer.

The project is organised in layers: ``schemas`` describe the records
exchanged with callers, ``repositories`` hide the store behind abstract
contracts, ``services`` hold the authorization and lifecycle rules, and
``api/v1`` exposes the services over HTTP.  Each domain (events,
incidents, messages, projects) has its own module in every layer.
"""
