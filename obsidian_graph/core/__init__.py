"""Vault core: path guard, parser, link resolver, search engine and index."""
