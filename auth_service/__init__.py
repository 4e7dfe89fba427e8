"""
Auth service for iLocal
"""
