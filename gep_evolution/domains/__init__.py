"""
gep_evolution/domains - Expression domain plug-ins
"""
from . import arithmetic

__all__ = ['arithmetic']
