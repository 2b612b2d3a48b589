# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="pastedeps",
    version="0.1.0",
    description="Assemble project files and their local import dependencies into LLM-ready text",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["pastedeps", "pastedeps.*"]),
    python_requires=">=3.9",
    install_requires=[
        "tiktoken",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'pastedeps=pastedeps.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
