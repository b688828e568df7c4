"""Presentation layer (GraphQL over HTTP and WebSocket)."""
