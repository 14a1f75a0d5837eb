"""Application services: the toast queue and the interaction controller."""
