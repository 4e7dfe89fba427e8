"""
Utility modules for auth service
"""
