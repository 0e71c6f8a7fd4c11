"""HTTP API for Stockroom: app factory, routes, schemas and request pipeline."""
