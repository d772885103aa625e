"""
setup.py

Сборка пакета движка Peg Solitaire.

Использование:
    pip install -e .            # разработка
    pip install -e .[test]      # с зависимостями тестов
"""

from setuptools import setup

setup(
    name="peg_engine",
    version="2.0.0",
    description="Peg Solitaire engine: board variants, hint search, background sessions",
    packages=["core", "analysis", "solvers", "utils", "peg_io"],
    py_modules=["main"],
    python_requires=">=3.8",
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "peg-engine=main:main",
        ],
    },
    zip_safe=False,
)
