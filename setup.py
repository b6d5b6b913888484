# setup.py
from setuptools import setup, find_packages

setup(
    name="site_shots",
    version="0.1.0",
    description="Проверка страниц после деплоя и скриншоты для ручного QA",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"site_shots.report": ["templates/*.j2"]},
    install_requires=[
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "Jinja2>=3.1",
        "playwright>=1.40",
        "Pillow>=10.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "site_shots=site_shots.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
