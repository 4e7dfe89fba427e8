"""
Shared code for the iLocal auth service
"""
