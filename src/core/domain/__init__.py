"""Domain models and page state.

Why:
- Pure data structures: wire models (Pydantic v2), the page regions the
  controller drives, and the commands users can issue.
- The domain knows nothing about HTTP or the terminal.
"""
