"""Command line interface for the OpenAPI context server."""
