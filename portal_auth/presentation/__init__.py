"""Presentation layer: HTTP routers, middleware and error rendering."""
