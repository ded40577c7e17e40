# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="listify",
    version="1.0.0",
    description="Aggregate the text files of a directory tree into a single document",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["listify*"]),
    package_data={"listify.interface.locales": ["*.json"]},
    python_requires=">=3.9",
    install_requires=[
        "customtkinter",  # GUI window (listify without arguments)
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'listify=listify.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
