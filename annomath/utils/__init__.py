# annomath/utils/__init__.py

"""
Utility modules for annomath (logging setup).
"""
