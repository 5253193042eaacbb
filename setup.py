"""
Setup script for SymCurve, with optional Cython compilation of the hot path.

Optional Cython compilation speeds up the per-base streaming stages:
- Triplet lookup and twist projection
- Trajectory integration, rolling mean and distance windows

Usage:
    pip install -e .
    python setup.py build_ext --inplace

If Cython is not available, the pure Python modules are used as-is.
"""

from setuptools import setup, find_packages, Extension
from setuptools.command.build_ext import build_ext
import sys

# Try to import Cython
try:
    from Cython.Build import cythonize
    USE_CYTHON = True
except ImportError:
    USE_CYTHON = False


class BuildExtWithFallback(build_ext):
    """Custom build_ext that gracefully handles Cython compilation failures."""

    def run(self):
        try:
            super().run()
        except Exception as e:
            print(f"Warning: Cython compilation failed: {e}")
            print("Falling back to pure Python implementation")

    def build_extension(self, ext):
        try:
            super().build_extension(ext)
        except Exception as e:
            print(f"Warning: Failed to build extension {ext.name}: {e}")
            print("Pure Python fallback will be used")


def get_extensions():
    """Get list of extensions to compile with Cython."""
    if not USE_CYTHON:
        return []

    # Compiled in place under the same module name as the .py source
    return [
        Extension(
            "Curvature.stages",
            ["Curvature/stages.py"],
            include_dirs=[],
            language="c"
        ),
    ]


# Only run Cython compilation if requested
if USE_CYTHON and 'build_ext' in sys.argv:
    extensions = cythonize(
        get_extensions(),
        compiler_directives={
            'language_level': "3",
            'embedsignature': True,
            'boundscheck': False,
            'wraparound': False,
            'cdivision': False,
            'nonecheck': False,
        }
    )
else:
    extensions = []

setup(
    name='SymCurve',
    version='2025.1',
    description='Streaming DNA curvature tracks from triplet roll/tilt/twist parameters',
    author='SymCurve Team',
    license='MIT',
    packages=find_packages(include=['Curvature', 'Curvature.*', 'Utilities', 'Utilities.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'pandas',
    ],
    extras_require={
        'test': ['pytest'],
        'cython': ['cython'],
    },
    entry_points={
        'console_scripts': [
            'symcurve=Utilities.cli:main',
        ],
    },
    ext_modules=extensions,
    cmdclass={'build_ext': BuildExtWithFallback},
    zip_safe=False,
)
