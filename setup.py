from setuptools import setup, find_packages

setup(
    name="conframe",
    version="0.1.0",
    description="Declarative command classes with typed arguments for interactive and single-shot CLIs.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="Roland Thomas Jr",
    author_email="roland@rtj.dev",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    python_requires=">=3.10",
    install_requires=[
        "prompt_toolkit>=3.0",
        "rich>=13.0",
        "pydantic>=2.0",
        "python-dateutil>=2.8",
        "python-json-logger>=3.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
    ],
)
