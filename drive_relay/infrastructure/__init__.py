"""
Infrastructure layer - external service integrations.

- drive: Google Drive API client and service account credentials

These wrappers translate between Google's API and our domain models.
"""
