"""Build plans, Node.js project detection helpers and Dockerfile generation."""

__version__ = "0.0.2"