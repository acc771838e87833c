"""Test configuration."""

import os

import logfire

# Test defaults; real environment variables win
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("INVITATIONS__BCRYPT_ROUNDS", "4")

logfire.configure(send_to_logfire=False, console=False)
