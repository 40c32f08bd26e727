"""AssetForge — FastAPI REST API layer.

This package contains the FastAPI application and the Pydantic request and
response envelopes.

Modules
-------
main
    FastAPI application with the generation routes, error handlers, and the
    ``main()`` CLI entry point.
models
    Pydantic models for API request and response validation.
"""
