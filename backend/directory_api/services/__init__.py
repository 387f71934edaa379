"""Services Layer — request orchestration over injected stores.

Invariants:
    - Services receive store objects and configuration values as parameters
    - Services raise DirectoryError subclasses; they never build HTTP responses
"""
