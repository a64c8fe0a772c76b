import os
import json
from setuptools import setup, find_packages  # type: ignore

def create_config():
    """Create config.json with default settings if it doesn't exist"""
    config_file = 'config.json'
    default_config = {
        "scoring": {
            "base_points": 7,
            "hint_penalty": 1,
            "initials_penalty": 2,
            "max_hints": 3,
            "streak_milestone": 5
        },
        "server": {
            "host": "0.0.0.0",
            "port": 5000
        }
    }

    if not os.path.exists(config_file):
        with open(config_file, 'w') as f:
            json.dump(default_config, f, indent=4)
        print(f"Created config file with default settings")

if __name__ == "__main__":
    create_config()

setup(
    name="wikiguess",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=[
        "api",
        "common_types",
        "exceptions",
        "game_service",
        "hint_generator",
        "initials_generator",
        "logger_config",
        "main",
        "main_config",
        "name_matcher",
        "people_catalog",
        "scoring",
        "session_store",
    ],
    install_requires=[
        "fastapi>=0.100.0",
        "pydantic>=1.10",
        "uvicorn>=0.20.0",
        "requests>=2.25.0",
    ],
    extras_require={
        "test": [
            "pytest>=6.0.0",
            "pytest-mock>=3.6.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "wikiguess=main:main",
        ],
    },
    python_requires=">=3.8",
)
