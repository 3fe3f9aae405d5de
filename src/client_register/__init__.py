"""Client Register - user registration service.

Registers users with a validated password, stores them with a hashed
secret and their phones, and hands back a signed token.
"""
