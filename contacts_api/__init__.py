"""Contacts API: users, contacts and addresses over FastAPI."""
