"""Terminal front-end: Typer commands and Rich rendering."""
