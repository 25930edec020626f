"""
Filestore API.

A small file manager exposing upload, download, list and delete over
two interchangeable storage backends: local filesystem and process memory.
"""
