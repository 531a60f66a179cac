from __future__ import annotations

from setuptools import find_packages, setup  # type: ignore


setup(
    name="badgerblog",
    version="0.1.0",
    description="Blog forms served with startup-registered client-side validation rules",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "fastapi>=0.110",
        "pydantic>=2.5",
        "uvicorn>=0.27",
        "httpx>=0.26",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "badgerblog=badgerblog.__main__:main",
        ],
    },
)
