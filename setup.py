# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="deptree4ai",
    version="1.0.0",
    description="Dependency tree and source context extractor for JS/TS/Svelte files",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["deptree4ai", "deptree4ai.*"]),
    python_requires=">=3.9",
    install_requires=[
        "tiktoken",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'deptree4ai=deptree4ai.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
