"""Infrastructure: database engine, subscriber store, and logging setup.

Invariants:
    - All SQLAlchemy exceptions are mapped to MailingListError subclasses here
"""
