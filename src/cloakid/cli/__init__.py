"""Command line interface for cloakid."""
