"""Helpers shared by the server and workflow tools."""
