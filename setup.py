# setup.py
from setuptools import setup, find_packages

setup(
    name="linestream",
    version="0.1.0",
    description="Rewindable, line-numbered, record-aware reader for (gzipped) text streams",
    package_dir={"": "src"},
    packages=find_packages(where="src"),  # Picks up 'linestream' and its subpackages
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'linestream=linestream.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
