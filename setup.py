from setuptools import setup, find_packages

setup(
    name="schoolmap",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi",
        "uvicorn",
        "python-dotenv",
        "pydantic>=2",
        "pydantic-settings",
        "sqlalchemy>=2",
        "pymysql",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "schoolmap=schoolmap.main:main",
        ],
    },
    python_requires=">=3.8",
)
