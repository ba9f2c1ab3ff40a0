"""
Restaurant POS order API.
"""
