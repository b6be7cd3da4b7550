"""Configuration, logging, errors, persistence bootstrap and security helpers."""
