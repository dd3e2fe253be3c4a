from setuptools import setup, find_packages

setup(
    name="clib-search",
    version="0.1.0",
    description="clib-search: search the clib package registry",
    author="clib authors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=["rich", "requests"],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "clib-search=clibsearch.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
