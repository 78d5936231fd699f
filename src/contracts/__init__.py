"""Shared wire contracts between the runtime and the web UI."""
