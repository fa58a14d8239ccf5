# SealedText Test Suite
"""
Test suite including:
- Unit tests
- Integration tests
- Security tests (tampering, invalid inputs)

Run with: pytest
Coverage: pytest --cov=sealedtext
"""
