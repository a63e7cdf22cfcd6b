"""REST API for the POM reconciler."""
