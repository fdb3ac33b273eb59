# blog_api/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Default professor creation on first startup
- db: Database configuration and connection management
- errors: Error taxonomy and exception handlers
- security: Password hashing, shared-secret proof and JWT tokens
"""
