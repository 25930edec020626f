"""Cross-cutting helpers for the Filestore API."""
