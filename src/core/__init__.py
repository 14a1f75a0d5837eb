"""Core: domain, validation, formatting and the interaction controller.

Why a separate layer:
- Nothing here knows about HTTP or the terminal; adapters and the CLI plug in
  through the protocols in `core.interfaces`.
"""
