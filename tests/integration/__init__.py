"""
Integration Tests Module

Contains tests that call the real Freesound API:
- test_live_api: Key validation, search and sound details
"""
