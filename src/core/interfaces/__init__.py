"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) implemented by concrete adapters and views.
- Inverts dependencies: the controller depends on abstractions only.
"""
