"""Shared logging and error tracking utilities."""
