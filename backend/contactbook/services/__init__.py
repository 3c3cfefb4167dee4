# contactbook/services/__init__.py
"""
Service layer: credential store, contact store and icon attachments.
"""
