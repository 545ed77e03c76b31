# Services package init
"""
Journal Backend — Services Layer
================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
Why:   Separation of concerns — routes handle HTTP, services handle business rules.

Service Inventory:
    - CredentialService: Password hashing and session token signing/verification
    - AuthService: Sign-up and sign-in against the users table
    - EntryService: Entry CRUD with optional per-user ownership scoping
    - validation: Pure input checks shared by the route handlers
"""
