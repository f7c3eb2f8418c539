"""
CHIP-8 Emulator - setup

Set CHIP8_CYTHONIZE=1 to compile the hot modules with Cython. They are
written in Cython pure-Python mode, so the same sources also run uncompiled.

Compile order:
1. timers.py    (simplest)
2. memory.py    (every fetch and store)
3. cpu.py       (dispatch and handlers)
"""
import os

from setuptools import setup, find_namespace_packages

# Cython compiler directives
compiler_directives = {
    "boundscheck": False,
    "cdivision": True,
    "wraparound": False,
    "infer_types": True,
    "initializedcheck": False,
    "nonecheck": False,
    "overflowcheck": False,
    "language_level": "3",
}

modules_to_compile = [
    "src/chip8/timers.py",
    "src/chip8/memory.py",
    "src/chip8/cpu.py",
]

ext_modules = []
if os.getenv("CHIP8_CYTHONIZE"):
    from Cython.Build import cythonize

    ext_modules = cythonize(
        modules_to_compile,
        compiler_directives=compiler_directives,
        annotate=True,
    )

setup(
    name="chip8_emulator",
    version="0.1.0",
    description="CHIP-8 interpreter with pygame frontend",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["chip8", "chip8.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "pygame",
        "Cython",
    ],
    extras_require={
        "test": ["pytest"],
    },
    ext_modules=ext_modules,
    zip_safe=False,
)
