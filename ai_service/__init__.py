"""
AI Service
OpenAI-backed content generation proxy for GO AI Hub
"""
