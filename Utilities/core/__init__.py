"""Core modules for SymCurve"""

from .performance_monitor import PerformanceMonitor

__all__ = [
    'PerformanceMonitor',
]
