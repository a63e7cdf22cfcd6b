"""Reconciliation services and their collaborators."""
