"""
Configuration management for the Filestore API.

Contains the Pydantic settings object and its cached accessor.
"""
