"""Core Layer — pure domain logic and boundary contracts.

Invariants:
    - Core NEVER imports from infrastructure, api or services
    - Functions here do no IO

Design Decisions:
    - Errors and protocols live in core so every layer can depend on them
"""
