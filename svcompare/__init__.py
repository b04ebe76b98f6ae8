"""
holds submodules related to comparing structural variant breakpoint call sets
"""
__version__ = '0.1.0'
