"""
Test Suite for Catalog API

Test Organization:
- conftest.py: Shared fixtures (test database, client, accounts, books, tokens)
- test_auth.py: Login and the auth gate
- test_users.py: /users endpoints
- test_books.py: /books endpoints
- test_security.py / test_tokens.py: Password hashing and JWT services
- test_config.py: Settings validation
- test_app.py: Application factory, health and root endpoints
- test_create_account.py: Account bootstrap script

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
