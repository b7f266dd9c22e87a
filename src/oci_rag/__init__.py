"""Retrieval-augmented generation with OCI Generative AI and Oracle Database 23ai."""

__version__ = "0.1.0"
