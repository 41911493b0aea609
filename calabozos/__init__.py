"""
Backend package for the Calabozos class API.

This package provides a FastAPI application that proxies the public D&D 5e
reference API and keeps a local table of the character classes it has seen.
"""
