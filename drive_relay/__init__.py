"""
Drive Upload Relay - forwards browser uploads to Google Drive.

This package contains the complete application:
- core: Framework-agnostic upload logic and error taxonomy
- infrastructure: Google Drive client and credential handling
- api: FastAPI routes and dependencies
- config: Application configuration
"""

__version__ = "0.1.0"
