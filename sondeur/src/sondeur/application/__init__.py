"""
Application layer - services, use cases, DTOs.
"""
