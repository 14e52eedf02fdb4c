"""Shared runtime: context, errors, exit codes, filesystem and logging helpers."""
