"""Persistence layer for Stockroom.

The collection lives in process memory; see ``repositories`` for the
storage interface and its in-memory implementation.
"""
