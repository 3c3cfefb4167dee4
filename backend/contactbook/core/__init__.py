# contactbook/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Default admin creation on startup
- db: Database configuration and connection management
- errors: HTTP error taxonomy
- policy: Authorization decisions (ownership and admin scope)
- security: Password hashing and session tokens
"""
