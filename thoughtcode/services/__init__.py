"""Services Layer — IO orchestration between routes, database and collaborators.

Invariants:
    - Routes stay thin and delegate to services
    - Pure logic lives in core/, services only sequence IO around it
"""
