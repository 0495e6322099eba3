"""
Unit Tests Module

Contains unit tests for individual components:
- test_query: Search query builder and filters
- test_models: Response parsing
- test_client: HTTP client against a fake server
- test_config: Settings from env, .env and JSON
- test_cli: Command line entry point
"""
