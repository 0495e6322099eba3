"""
Tests Module

Contains test suites for the Freesound client:
- unit: Offline tests against an in-process fake Freesound server
- integration: Tests against the live API (need FREESOUND_API_KEY)
"""
