from setuptools import setup, find_packages

setup(
    name="influx-cli",
    version="0.1.0",
    description="Bind command-line arguments to annotated Python classes.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="John Dunlap",
    author_email="john.david.dunlap@gmail.com",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0",
        "python-dateutil>=2.8",
        "python-json-logger>=3.1",
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
    ],
)
