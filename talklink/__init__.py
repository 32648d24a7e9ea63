"""Federated Talk Link: resolve rooms on a remote Talk server into call links."""
