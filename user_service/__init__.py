"""
User Service
Account signup, authentication and email verification for GO AI Hub
"""
