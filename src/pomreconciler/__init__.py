"""POM Reconciler: diagnostics for project descriptor documents."""

__version__ = "0.3.0"
