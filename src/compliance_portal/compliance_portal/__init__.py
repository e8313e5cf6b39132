"""Compliance Portal package.

Feature modules (holidays, legal_docs, notifications, scheduling, ...) each keep
a thin Flask controller on top of service and repository layers.
"""
