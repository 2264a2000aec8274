"""
Target management and name lookup modules.
"""
