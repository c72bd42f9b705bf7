"""
Configuration management for the Image Gateway.

Contains the Pydantic settings model and the cached accessor used by the app
factory, the CLI and the Lambda entry point.
"""
