# setup.py
from setuptools import setup, find_packages

setup(
    name="quick_db",
    version="0.1.0",
    description="Shorthand CRUD helpers over a single database connection",
    author="Swift Fox",
    packages=find_packages(
        exclude=(
            "tests",
            "tests.*",
            "docs",
            "build",
            "dist",
        )
    ),
    install_requires=[
        "PyMySQL>=1.0",
        "psycopg2-binary>=2.9",
    ],
    extras_require={
        "tests": ["pytest>=7"],
    },
    python_requires=">=3.10",
)
