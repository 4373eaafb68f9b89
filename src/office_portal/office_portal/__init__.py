"""Office Portal package.

Feature modules (employees, events, home) expose a thin Flask controller layer
on top of service, validator and repository layers.
"""
