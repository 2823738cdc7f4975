# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="dirlist",
    version="0.1.0",
    description="Directory listing tool with recursive, long and human-readable views",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["dirlist", "dirlist.*"]),
    package_data={"dirlist.interface.locales": ["*.json"]},
    python_requires=">=3.9",
    install_requires=[
        "colorama>=0.4.6",  # Directory highlighting on every console, Windows included
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'dirlist=dirlist.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
