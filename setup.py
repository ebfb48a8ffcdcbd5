import os

from setuptools import setup, find_packages

install_requires = ["lark", "pydantic>=2"]

# Define optional dependencies for development
extras_require = {"dev": ["pytest"]}

setup(
    name="carrot-compiler",
    version="0.4.0",
    packages=find_packages(where=".", exclude=["tests", "tests.*", "*.tests", "*.tests.*"]),
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "carrotc = carrotc.cli:main",
        ],
    },
    include_package_data=True,
    package_data={"carrotc.parser.core": ["*.lark"]},
    description="Parser, name analyser and unparser for the Carrot teaching language.",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
)
