# setup.py

from setuptools import setup, find_packages

with open("README.md", "r", encoding='utf-8') as fh:
    long_description = fh.read()

setup(
    name="pyumlviz",
    version="0.1.0",
    description="Draw UML class and module dependency diagrams of Python projects using Graphviz",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["pyumlviz", "pyumlviz.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.9',
    install_requires=[
        'click',
        'graphviz>=0.20',
        'networkx',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'pyumlviz=pyumlviz.cli:main',
        ],
    },
)
