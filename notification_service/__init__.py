"""
Notification Service
Email dispatch for account confirmation and password reset links
"""
