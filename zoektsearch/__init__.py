"""Client-side query/response engine for a Zoekt code-search server."""
